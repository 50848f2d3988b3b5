"""Generate a synthetic roster for trying out the assignment tool."""

import pandas as pd
import random
import os

from config.defaults import SAMPLE_PARTICIPANT_COUNT, SAMPLE_SECTIONS

FAMILY_NAMES = ["Sato", "Suzuki", "Takahashi", "Tanaka", "Ito", "Watanabe", "Yamamoto",
                "Nakamura", "Kobayashi", "Kato", "Yoshida", "Yamada"]
GIVEN_NAMES = ["Haruto", "Yui", "Sota", "Hina", "Ren", "Aoi", "Yuto", "Mei", "Riku", "Sakura"]


def generate_participants_df(count: int = SAMPLE_PARTICIPANT_COUNT) -> pd.DataFrame:
    """Generate survey responses: grades 1-4, mostly single-slot availability."""
    random.seed(42)
    rows = []
    for i in range(1, count + 1):
        rows.append({
            "Response ID": f"R{i:03d}",
            "Name": f"{random.choice(FAMILY_NAMES)} {random.choice(GIVEN_NAMES)}",
            "Section": random.choice(SAMPLE_SECTIONS),
            "Grade": random.choices([1, 2, 3, 4], weights=[35, 30, 20, 15])[0],
            "Availability": random.choices(["morning", "afternoon", "both"], weights=[35, 35, 30])[0],
        })
    return pd.DataFrame(rows)


def generate_teams_df() -> pd.DataFrame:
    """Generate distribution teams: 3 morning, 3 afternoon, 1 all-day, 1 PR, 1 other."""
    teams = [
        {"Team ID": "T01", "Team Code": "AM-1", "Team Name": "Station North AM", "Time Slot": "morning",   "Assigned Area": "A1", "Adjacent Areas": "A2",     "Max Members": 8,  "Preferred Grades": ""},
        {"Team ID": "T02", "Team Code": "AM-2", "Team Name": "Shopping Street AM", "Time Slot": "morning", "Assigned Area": "A2", "Adjacent Areas": "A1, A3", "Max Members": 8,  "Preferred Grades": "1"},
        {"Team ID": "T03", "Team Code": "AM-3", "Team Name": "Riverside AM", "Time Slot": "morning",       "Assigned Area": "A3", "Adjacent Areas": "A2",     "Max Members": 6,  "Preferred Grades": ""},
        {"Team ID": "T04", "Team Code": "PM-1", "Team Name": "Station North PM", "Time Slot": "afternoon", "Assigned Area": "B1", "Adjacent Areas": "B2",     "Max Members": 8,  "Preferred Grades": ""},
        {"Team ID": "T05", "Team Code": "PM-2", "Team Name": "Campus East PM", "Time Slot": "afternoon",   "Assigned Area": "B2", "Adjacent Areas": "B1, B3", "Max Members": 8,  "Preferred Grades": "2"},
        {"Team ID": "T06", "Team Code": "PM-3", "Team Name": "Old Town PM", "Time Slot": "afternoon",      "Assigned Area": "B3", "Adjacent Areas": "B2",     "Max Members": 6,  "Preferred Grades": ""},
        {"Team ID": "T07", "Team Code": "ALL-1", "Team Name": "Suburbs All Day", "Time Slot": "all",       "Assigned Area": "C1", "Adjacent Areas": "",       "Max Members": 10, "Preferred Grades": "3, 4"},
        {"Team ID": "T08", "Team Code": "PR-1", "Team Name": "Promotion Day", "Time Slot": "pr",           "Assigned Area": "HQ", "Adjacent Areas": "",       "Max Members": 5,  "Preferred Grades": ""},
        {"Team ID": "T09", "Team Code": "OT-1", "Team Name": "Reserve", "Time Slot": "other",             "Assigned Area": "HQ", "Adjacent Areas": "",       "Max Members": 5,  "Preferred Grades": ""},
    ]
    return pd.DataFrame(teams)


def generate_sample_csvs(output_dir: str):
    """Write sample CSV files to the given directory."""
    os.makedirs(output_dir, exist_ok=True)
    generate_participants_df().to_csv(os.path.join(output_dir, "participants.csv"), index=False)
    generate_teams_df().to_csv(os.path.join(output_dir, "teams.csv"), index=False)


def generate_sample_excel(output_dir: str):
    """Write a single two-tab Excel file with both datasets."""
    os.makedirs(output_dir, exist_ok=True)
    path = os.path.join(output_dir, "sample_roster.xlsx")
    with pd.ExcelWriter(path, engine="openpyxl") as writer:
        generate_participants_df().to_excel(writer, sheet_name="Participants", index=False)
        generate_teams_df().to_excel(writer, sheet_name="Teams", index=False)


if __name__ == "__main__":
    out = os.path.join(os.path.dirname(__file__), "..", "sample_files")
    generate_sample_csvs(out)
    generate_sample_excel(out)
    print("Sample CSV and Excel files generated in sample_files/")
