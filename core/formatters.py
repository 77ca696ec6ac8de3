# core/formatters.py

# all pure utilities & date/datetime helpers
# must never import from models!

import datetime

# === generic text formatters ===


def format_banner_text(title: str, width: int = 40) -> str:
    line = "=" * width
    centered_title = f"{title:^{width}}"

    return f"{line}\n{centered_title}\n{line}"


def format_percent_bar(percent: int, width: int = 20) -> str:
    filled = round(width * max(0, min(percent, 100)) / 100)

    return f"[{'#' * filled}{'.' * (width - filled)}] {percent:>3}%"


# === date formatters ===


def format_entry_date_long(entry_date: datetime.date) -> str:
    return f"{entry_date.strftime('%A, %B %d, %Y')}"


def format_timestamp_ms(timestamp_ms: int) -> str:
    stamp = datetime.datetime.fromtimestamp(timestamp_ms / 1000)

    return stamp.strftime("%Y-%m-%d %H:%M")
