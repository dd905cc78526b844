from datetime import datetime, timedelta, timezone


def get_eta_remaining(done_count, total_count, elapsed_seconds):
    """ETA for the files left in the current input, from the average so far."""
    avg_time_per_file = elapsed_seconds / done_count
    remaining_seconds = avg_time_per_file * (total_count - done_count)
    return _get_eta_string(remaining_seconds)


def format_runtime(seconds):
    seconds = int(seconds)
    return f"{seconds // 3600:02d}:{(seconds % 3600) // 60:02d}:{seconds % 60:02d}"


def _format_duration(time_in_seconds):
    eta_hours = int(time_in_seconds // 3600)
    eta_mins = int((time_in_seconds % 3600) // 60)
    eta_secs = int(time_in_seconds % 60)
    if eta_hours > 0:
        return f"{eta_hours}h{eta_mins}m{eta_secs}s"
    if eta_mins > 0:
        return f"{eta_mins}m{eta_secs}s"
    return f"{eta_secs}s"


def _get_eta_string(time_in_seconds):
    completion_time = (datetime.now(timezone.utc) + timedelta(
        seconds=time_in_seconds)).strftime("%Y-%m-%d %H:%M:%S")
    return f"{completion_time} ({_format_duration(time_in_seconds)})"
