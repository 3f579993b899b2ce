"""
Task subsystem.

Components:
- task_models.py: data structures (TaskSnapshot, TimerRecord, ScheduleEntry, ActiveSession)
- timer_reader.py: finds the task with a running work session
- schedule_builder.py: today's dynamic, back-to-back schedule
"""
