"""
Course Constants

Static mapping from the numeric course ids used by registrar forms to the
course mnemonics embedded in student numbers.
"""

# Course id -> canonical course code
COURSE_CODES = {
    101: "BEED",
    102: "BSEd-English",
    103: "BSEd-Math",
    201: "BSBA-HRM",
}

# Human-readable program names for display
COURSE_LABELS = {
    101: "Bachelor of Elementary Education (BEED)",
    102: "Bachelor of Secondary Education - Major in English",
    103: "Bachelor of Secondary Education - Major in Mathematics",
    201: "Bachelor of Science in Business Administration - Major in HRM",
}

# Prefix for course ids missing from COURSE_CODES
FALLBACK_COURSE_PREFIX = "COURSE"
