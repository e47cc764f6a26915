"""Output formatters for recommendation runs."""

import json

from drycast.models.reporting import RankedWindow, RecommendationRun


def format_duration(hours: int) -> str:
    if hours == 1:
        return "1 hour"
    if hours < 24:
        return f"{hours} hours"
    days, rest = divmod(hours, 24)
    day_part = "1 day" if days == 1 else f"{days} days"
    if rest == 0:
        return day_part
    return f"{day_part} {format_duration(rest)}"


def format_window_line(rank: int, rw: RankedWindow) -> str:
    w = rw.window
    s = rw.score
    score_txt = "UNSAFE" if s.unsafe else f"{s.score:+.3f}"
    return (
        f"{rank:>2}. {w.start_time:%a %d %b %H:%M} "
        f"({format_duration(w.duration_hours)}) {score_txt} | "
        f"{w.weather.temp_c:.1f}C {w.weather.rh:.0f}% "
        f"{w.weather.wind_ms:.1f}m/s rain {w.weather.rain_p:.0%} "
        f"{w.weather.rain_mm:.1f}mm | {rw.conditions} - {rw.recommendation}"
    )


def format_run_text(r: RecommendationRun) -> str:
    """Plain text summary for terminals and logs."""
    sources = ", ".join(f"{k}={v}" for k, v in sorted(r.source_hours.items()))
    lines = [
        f"=== Drying Windows | Run {r.run_id[:8]} | Config {r.config_hash or '-'} ===",
        f"Windows: {r.windows_scored} x {format_duration(r.width_hours)}, "
        f"{r.unsafe_windows} unsafe",
        f"Sources (hours): {sources or 'none'}",
    ]
    if not r.ranked:
        lines.append("No windows available")
    for i, rw in enumerate(r.ranked, start=1):
        lines.append(format_window_line(i, rw))
    lines.append(f"Duration: {r.duration_seconds:.3f}s")
    return "\n".join(lines)


def format_run_json(r: RecommendationRun) -> str:
    """JSON summary for programmatic consumption."""
    data = {
        "run_id": r.run_id,
        "generated_at": r.generated_at.isoformat(),
        "width_hours": r.width_hours,
        "config_hash": r.config_hash,
        "windows_scored": r.windows_scored,
        "unsafe_windows": r.unsafe_windows,
        "source_hours": r.source_hours,
        "windows": [_window_dict(rw) for rw in r.ranked],
    }
    return json.dumps(data, indent=2)


def _window_dict(rw: RankedWindow) -> dict:
    w = rw.window
    s = rw.score
    return {
        "id": w.id,
        "start_time": w.start_time.isoformat(),
        "end_time": w.end_time.isoformat(),
        "duration_hours": w.duration_hours,
        "score": s.score,
        "unsafe": s.unsafe,
        "vpd_kpa": round(s.vpd_kpa, 4),
        "weather": {
            "temp_c": w.weather.temp_c,
            "rh": w.weather.rh,
            "wind_ms": w.weather.wind_ms,
            "cloud": w.weather.cloud,
            "rain_p": w.weather.rain_p,
            "rain_mm": w.weather.rain_mm,
        },
        "features": {
            "f_temp": s.features.f_temp,
            "f_hum": s.features.f_hum,
            "f_wind": s.features.f_wind,
            "f_cloud": s.features.f_cloud,
            "f_rain": s.features.f_rain,
            "f_vpd": s.features.f_vpd,
        },
        "conditions": rw.conditions,
        "recommendation": rw.recommendation,
    }
