"""Exam Portal - timed multiple-choice exams with scored results."""
