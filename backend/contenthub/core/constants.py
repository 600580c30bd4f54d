"""
Content Hub - Constants
Bloom's level descriptions and the built-in curriculum seed
"""

BLOOMS_DESCRIPTIONS = {
    "Level 0 (Readiness)": "Student Readiness",
    "Level 1 (Remember & Understand)": "Remember & Understand",
    "Level 2 (Apply & Analyze)": "Derive, Apply & Analyze",
}

# Seed used when no curriculum document has been stored yet.
# Order matters: it is the display order at every level.
DEFAULT_CURRICULUM = {
    "Class 9": {
        "Science": {
            "Physics": {
                "Motion": ["Speed and Velocity", "Acceleration", "Laws of Motion"],
                "Force": ["Types of Force", "Newton Laws", "Friction"],
            },
            "Biology": {
                "Life Processes": ["Nutrition", "Respiration", "Transportation"],
            },
        },
        "Mathematics": {
            "Algebra": {
                "Linear Equations": ["One Variable", "Two Variables"],
                "Polynomials": ["Introduction", "Factorization"],
            },
        },
    },
    "Class 10": {
        "Science": {
            "Chemistry": {
                "Acids Bases and Salts": ["Properties of Acids", "Properties of Bases", "pH Scale"],
            },
        },
    },
}
