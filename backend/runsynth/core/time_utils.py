def seconds_to_hhmmss(total_seconds: float) -> str:
    """
    Convert total seconds -> 'H:MM:SS' (rounded to the nearest second).
    Example: 400.3 -> '0:06:40'
    """
    total = int(round(total_seconds))
    hours = total // 3600
    minutes = (total % 3600) // 60
    seconds = total % 60
    return f"{hours}:{minutes:02d}:{seconds:02d}"


def compute_pace(duration_seconds: float, distance_m: float) -> str:
    """
    Compute pace per kilometre as 'M:SS/km'.
    Example: duration=400.3 sec, distance=1112 m -> '6:00/km'
    """
    if distance_m <= 0:
        return "0:00/km"

    pace_sec = int(round(duration_seconds / (distance_m / 1000)))

    minutes = pace_sec // 60
    seconds = pace_sec % 60
    return f"{minutes}:{seconds:02d}/km"


def variant_filename(variant_index: int) -> str:
    return f"run_{variant_index}.fit"
