"""LIFESCORE v1.0 demo: score a sample week and print the status report."""

from lifescore import analyze_history, default_catalog, generate_report, save_log

SAMPLE_WEEK = [
    ("2026-02-16", {"schoolwork": 1, "gym": 1, "sleep_7_9h": 1, "meal_quality": "Good", "read": 1}),
    ("2026-02-17", {"schoolwork": 1, "personal_project": 1, "gym": 1, "meal_quality": "Great", "phone_use": 90}),
    ("2026-02-18", {"classes": 1, "meditate": 1, "social": "Casual Hangout", "past_12am": 1}),
    ("2026-02-19", {"schoolwork": 1, "personal_project": 1, "classes": 1, "job_search": 1, "gym": 1,
                    "sleep_7_9h": 1, "meal_quality": "Great", "read": 1}),
    ("2026-02-20", {"gym": 1, "wake_8am": 1, "supplements": 1, "stretching": 1, "porn": 1}),
    ("2026-02-21", {"schoolwork": 1, "personal_project": 1, "gym": 1, "sleep_7_9h": 1,
                    "meal_quality": "Good", "social": "Meaningful Connection"}),
    ("2026-02-22", {"read": 1, "meditate": 1, "binged_content": 1, "phone_use": 320}),
]

if __name__ == "__main__":
    catalog = default_catalog()
    history = []
    for day, values in SAMPLE_WEEK:
        history, _ = save_log(day, values, history, catalog)
    print(generate_report(analyze_history(history, catalog)))
