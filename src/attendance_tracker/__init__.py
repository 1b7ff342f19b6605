"""Attendance Tracker package.

Reconciles check-in devices' authentication events into daily attendance records.
Organised by feature modules (attendance, shifts, schedules, users, devices, reports)
with a thin Flask controller layer over service/repository layers.
"""

__version__ = "1.0.0"
