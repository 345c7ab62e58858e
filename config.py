"""
Configuration options for the Battery Notifier.

This module contains the fixed settings for the battery notifier: where the
battery is read from, how the charge is split into levels, and what each
level's notification says. Modify these values to customize the behavior.
"""

APP_NAME: str = "battery-notifier"

# Battery paths (will try these in order)
BATTERY_PATHS: list = [
    "/sys/class/power_supply/BAT0",
    "/sys/class/power_supply/BAT1",
]

# AC adapter paths (will try these in order)
ADAPTER_PATHS: list = [
    "/sys/class/power_supply/ADP1",
    "/sys/class/power_supply/AC",
    "/sys/class/power_supply/ACAD",
    "/sys/class/power_supply/AC0",
]

CAPACITY_FILE: str = "capacity"
AC_ONLINE_FILE: str = "online"

# How often the capacity file is compared for changes (milliseconds)
POLL_INTERVAL_MS: int = 500

# Level breakpoints (inclusive), anything between LOW_MAX and HIGH_MIN is normal
CRITICAL_MAX: int = 14  # 0-14
VERY_LOW_MAX: int = 24  # 15-24
LOW_MAX: int = 40  # 25-40
HIGH_MIN: int = 89  # 89-100

# Notification per level: summary, body, urgency (low/normal/critical), timeout in ms, icon
NOTIFICATIONS = {
    "high": {
        "summary": "High Battery Charge",
        "body": "Unplug your computer from power source to prevent the device from overheating",
        "urgency": "low",
        "timeout": 60_000,
        "icon": "battery-full-charging-symbolic",
    },
    "low": {
        "summary": "Battery Low",
        "body": "Connect your computer to a power source as soon as possible",
        "urgency": "normal",
        "timeout": 120_000,  # 2 min
        "icon": "battery-low-symbolic",
    },
    "very_low": {
        "summary": "Battery Very Low",
        "body": "Less than 25% Battery left. Plug your computer in immediately!",
        "urgency": "critical",
        "timeout": 600_000,  # 10 min
        "icon": "battery-caution-symbolic",
    },
    "critical": {
        "summary": "Battery Critical",
        "body": "Shutting down in 60 seconds.",
        "urgency": "critical",
        "timeout": 60_000,  # 1 min
        "icon": "battery-empty-symbolic",
    },
}

# Automatic shutdown at critical level
SHUTDOWN_DELAY: int = 60  # seconds
SHUTDOWN_COMMAND: list = ["poweroff"]
ABORT_ACTION_LABEL: str = "Abort shutdown"

# Logging
LOG_LEVEL: str = "INFO"
LOG_FORMAT: str = "%(asctime)s %(levelname)s %(name)s: %(message)s"
