"""Default configuration constants for the Festival Flyer Team Assignment tool."""

# Team capacity when a team has no Max Members set
DEFAULT_MAX_MEMBERS = 10

# Grades
MIN_GRADE = 1
MAX_GRADE = 4
SENIOR_GRADE = 3  # grade >= this counts as senior

# Slots an assignment can resolve to
ASSIGNABLE_SLOTS = ["morning", "afternoon"]

# Whether "other" teams take part in auto assignment by default
INCLUDE_OTHER_TEAMS = False

# PR opt-out choice: participant waits at headquarters instead of being placed
PR_OPT_OUT_CHOICE = "none"

# Substring aliases for localized form labels, checked in order ("both" first
# since labels like "午前・午後どちらでも" contain both slot names)
AVAILABILITY_ALIASES = {
    "both": ["both", "all day", "終日", "両方", "どちらでも"],
    "morning": ["morning", "午前"],
    "afternoon": ["afternoon", "午後"],
}

TIME_SLOT_ALIASES = {
    "both": ["both", "all day", "終日", "両方"],
    "morning": ["morning", "午前"],
    "afternoon": ["afternoon", "午後"],
    "pr": ["pr専用", "広報", "ｐｒ"],
    "other": ["other", "その他", "そのほか"],
}

# Dashboard thresholds
TEAM_FULL_THRESHOLD = 1.0     # fill rate at which a team is flagged as full
TEAM_UNDERFILLED_THRESHOLD = 0.5  # fill rate below this is flagged as underfilled

# Sample roster sizes
SAMPLE_PARTICIPANT_COUNT = 60
SAMPLE_SECTIONS = ["Planning", "Design", "Logistics", "Publicity", "Stage", "Finance"]
