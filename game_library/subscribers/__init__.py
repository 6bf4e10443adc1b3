"""Mailing-list sign-ups, appended to a CSV file."""
