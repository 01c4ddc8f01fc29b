# Keep step keys EXACTLY aligned with the section keys the summary step edits

STORAGE_KEY = "plan-builder-onboarding"

SCHEMA_VERSION = 2

# Canonical step order for the plan wizard
STEP_WELCOME = "welcome"
STEP_PROJECT_TYPE = "projectType"
STEP_BUSINESS_CONTEXT = "businessContext"
STEP_TIMELINE_BUDGET = "timelineBudget"
STEP_FEATURES = "features"
STEP_SUMMARY = "summary"

# Sections of formData a step owns (welcome/summary own none)
SECTION_KEYS = [
    STEP_PROJECT_TYPE,
    STEP_BUSINESS_CONTEXT,
    STEP_TIMELINE_BUDGET,
    STEP_FEATURES,
]

PRIORITY_MUST_HAVE = "must-have"
PRIORITY_NICE_TO_HAVE = "nice-to-have"
