"""Output formatters for forecasts."""

import json

from zipcast.models.forecast import Forecast


def format_forecast_text(zip_code: str, f: Forecast) -> str:
    """Plain text rendering, one decimal place per temperature."""
    u = f.unit.symbol
    lines = [
        f"=== Forecast for {zip_code} ===",
        f"Current: {f.current_temp:.1f} {u}",
        f"Today High: {f.today_high:.1f} {u}, Low: {f.today_low:.1f} {u}",
    ]
    if f.upcoming:
        lines.append(f"Next {len(f.upcoming)} days:")
        for d in f.upcoming:
            lines.append(
                f"  {d.date} -> High: {d.high_temp:.1f} {u}, Low: {d.low_temp:.1f} {u}"
            )
    lines.append("From cache" if f.is_from_cache else "Live data")
    return "\n".join(lines)


def format_forecast_json(zip_code: str, f: Forecast) -> str:
    """JSON rendering for programmatic consumption. Values are not rounded."""
    data = {
        "zip": zip_code,
        "unit": str(f.unit),
        "current_temp": f.current_temp,
        "today_high": f.today_high,
        "today_low": f.today_low,
        "upcoming": [
            {"date": d.date, "high_temp": d.high_temp, "low_temp": d.low_temp}
            for d in f.upcoming
        ],
        "is_from_cache": f.is_from_cache,
    }
    return json.dumps(data, indent=2)
