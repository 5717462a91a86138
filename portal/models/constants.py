# portal/models/constants.py

# Assessment categories accepted by the backend for internal marks
EXAM_TYPES = [
    "Internal 1",
    "Internal 2",
    "Internal 3",
    "Assignment",
    "Quiz",
    "Project",
]

# (minimum percentage, grade), highest band first
GRADE_BANDS = [
    (90, "A+"),
    (80, "A"),
    (70, "B+"),
    (60, "B"),
    (50, "C"),
    (40, "D"),
]
FAIL_GRADE = "F"

ATTENDANCE_STATUSES = ["present", "absent"]

MIN_PASSWORD_LENGTH = 6
