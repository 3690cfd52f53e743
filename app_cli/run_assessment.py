from __future__ import annotations
import os, datetime, json
from clp_core.question_bank import AGE_GROUPS, questions_for_age, skill_for
from clp_core.scoring import calculate_scores
from clp_core.personality import describe
QUIZ_TYPES = ["parent_home", "teacher_classroom", "student_self", "general"]
def ask(prompt: str, options=None) -> str:
    if options:
        print(prompt)
        for i,opt in enumerate(options): print(f"  [{i}] {opt}")
        while True:
            v = input("Your choice (index): ").strip()
            if v.isdigit() and int(v) < len(options): return options[int(v)]
            print("Enter a number index.")
    else:
        return input(prompt + " ").strip()
def ask_likert(prompt: str) -> int:
    while True:
        v = ask(f"(1-5) {prompt}  [1=never, 5=always]")
        if v in {"1","2","3","4","5"}: return int(v)
        print("Enter a value from 1 to 5.")
def main():
    print("Child Learning Profile")
    age = ask("Age group:", AGE_GROUPS)
    quiz_type = ask("Who is answering?", QUIZ_TYPES)
    responses = {}
    for q in questions_for_age(age):
        if skill_for(q.id) is None: continue
        label = q.skill or "preference"
        if q.type == "LIKERT":
            responses[str(q.id)] = ask_likert(f"Q{q.id} {label}")
        elif q.type == "CHOICE":
            responses[str(q.id)] = ask(f"Q{q.id} {label}", list(q.options or ()))
        else:
            raw = ask(f"Q{q.id} {label} (comma separated: {', '.join(q.options or ())})")
            responses[str(q.id)] = [v.strip() for v in raw.split(",") if v.strip()]
    scores = calculate_scores(responses, quiz_type, age)
    summary = describe(scores)
    print(f"\n{summary['personality_label']}: {summary['description']}")
    for skill, val in scores.items(): print(f"  {skill:<20} {val}")
    os.makedirs("reports", exist_ok=True)
    ts = datetime.datetime.now().strftime("%Y%m%d_%H%M%S")
    path = os.path.join("reports", f"profile_{quiz_type}_{ts}.json")
    with open(path, "w", encoding="utf-8") as f:
        json.dump({"age_group": age, "quiz_type": quiz_type, "responses": responses, "scores": scores, **summary}, f, indent=2)
    print(f"Done. Profile saved to: {path}")
if __name__ == "__main__": main()
