"""
MicroDiary package.

A single-user time-use diary: activities are logged with HH:MM start and end
times on a calendar date, validated against the rest of that day, and exported
for analysis.
"""
import logging

# Applications using this package should configure their own logging.
logging.getLogger(__name__).addHandler(logging.NullHandler())

# Single source for the app version; settings.APP_VERSION defaults to it.
VERSION = "0.1.0"
