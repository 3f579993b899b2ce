# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
Do NOT commit webhook URLs that carry tokens. Use a local .env (gitignored).

This file exists to make the repo self-documenting even without opening .env.
"""

ENV_VARS = {
    # App / logging
    "TASKPULSE_APP_NAME": "Name used in log lines (default: taskpulse).",
    "TASKPULSE_LOG_LEVEL": "Console logging level (default: INFO). The log file always gets DEBUG.",
    # Paths (gitignored)
    "TASKPULSE_DATA_DIR": "Local data directory (default: .local/taskpulse).",
    "TASKPULSE_TASKS_PATH": "Task feed JSON written by the task sync (default: <data_dir>/tasks.json).",
    "TASKPULSE_TIMER_RECORDS_PATH": "Timer records JSON written by the timer widget (default: <data_dir>/timers.json).",
    # Poll loop
    "TASKPULSE_POLL_INTERVAL_SECONDS": "Seconds between passes (default: 30, minimum 1).",
    "TASKPULSE_GRACE_PERIOD_SECONDS": "Hold all alerts this long after activation (default: 0 = off).",
    "TASKPULSE_ALERTS_PERMISSION": "granted / denied / default. The loop only runs when granted.",
    # Notification preferences
    "TASKPULSE_REMINDER_MINUTES": "Minutes before a task's due time to remind (default: 5).",
    "TASKPULSE_REPEAT_EVERY_MINUTES": "Repeat interval for late/overtime alerts (default: 10).",
    "TASKPULSE_NOTIFY_ON_TIME": "Alert right at the due time (true/false, default: true).",
    # Schedule
    "TASKPULSE_MAX_TASK_MINUTES": "Tasks estimated longer than this are large projects, never scheduled (default: 180).",
    "TASKPULSE_SCHEDULE_GAP_MINUTES": "Gap between tasks in the projected schedule (default: 5).",
    # Delivery
    "TASKPULSE_WEBHOOK_URL": "POST alerts as JSON here; empty => alerts are only logged.",
}
