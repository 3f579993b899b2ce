"""
Notification subsystem.

Components:
- alert_models.py: alert classes, preferences, candidates and alerts
- classifier.py: which alert classes are due for a task this tick
- cooldown.py: per-(task, class) re-fire limits and the completed set
- dispatcher.py / sinks.py: delivery
"""
