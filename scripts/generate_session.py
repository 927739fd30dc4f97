"""Generate a fake voting session for demos and manual testing.

Household member names come from faker with a fixed seed, so the same seed
always produces the same session. The output is the JSON session format read
by feastvote.parsers.json_session.

Usage:
    python scripts/generate_session.py
    python scripts/generate_session.py -o session.json --members 5 --candidates 18
"""

import argparse
import json
from collections import OrderedDict
from datetime import datetime, timedelta, timezone
from pathlib import Path

from faker import Faker

DEFAULT_OUTPUT = Path("examples") / "sample-session.json"

SEED = 20260115

DISHES = [
    ("Chicken Tikka Masala", "Indian"),
    ("Chana Masala", "Indian"),
    ("Pad Thai", "Thai"),
    ("Green Curry", "Thai"),
    ("Beef Tacos", "Mexican"),
    ("Black Bean Enchiladas", "Mexican"),
    ("Spaghetti Carbonara", "Italian"),
    ("Margherita Pizza", "Italian"),
    ("Mushroom Risotto", "Italian"),
    ("Teriyaki Salmon", "Japanese"),
    ("Chicken Katsu", "Japanese"),
    ("Beef Stir Fry", "Chinese"),
    ("Mapo Tofu", "Chinese"),
    ("Greek Salad with Falafel", "Mediterranean"),
    ("Shakshuka", "Mediterranean"),
    ("Cheeseburgers", "American"),
    ("Mac and Cheese", "American"),
    ("Shepherd's Pie", "British"),
    ("Ratatouille", "French"),
    ("Bibimbap", None),
]

# Weighted so most votes are mild and vetoes are rare
CATEGORY_WEIGHTS = OrderedDict([
    ("super_like", 0.15),
    ("like", 0.35),
    ("ok", 0.3),
    ("dislike", 0.15),
    ("veto", 0.05),
])


def generate_session(num_members: int, num_candidates: int, seed: int) -> dict:
    """Build a session dictionary with fake members, recipes and votes."""
    fake = Faker()
    Faker.seed(seed)

    members = []
    while len(members) < num_members:
        name = fake.first_name()
        if name not in members:
            members.append(name)

    dishes = fake.random_sample(DISHES, length=min(num_candidates, len(DISHES)))
    candidates = []
    for index, (title, cuisine) in enumerate(dishes, start=1):
        candidates.append({
            "id": f"recipe-{index:02d}",
            "title": title,
            "cost_per_serving": fake.random_int(min=150, max=900, step=25),
            "servings": fake.random_element([2, 4, 4, 6]),
            "cuisine": cuisine,
            "difficulty": fake.random_element(["easy", "medium", "hard"]),
        })

    start = datetime(2026, 1, 15, 18, 0, tzinfo=timezone.utc)
    votes = []
    for member in members:
        for candidate in candidates:
            category = fake.random_element(CATEGORY_WEIGHTS)
            votes.append({
                "voter": member,
                "candidate": candidate["id"],
                "category": category,
                "comment": fake.sentence(nb_words=5) if category == "veto" else None,
                "timestamp": (start + timedelta(minutes=fake.random_int(0, 2880))).isoformat(),
            })

    return {
        "name": "Week of " + start.strftime("%b %d"),
        "meal_count": 5,
        "budget_limit": 10000,
        "members": members,
        "candidates": candidates,
        "votes": votes,
    }


def main():
    parser = argparse.ArgumentParser(
        description="Generate a fake voting session JSON file")
    parser.add_argument("-o", "--output", default=str(DEFAULT_OUTPUT),
                        help=f"Output path (default: {DEFAULT_OUTPUT})")
    parser.add_argument("--members", type=int, default=4,
                        help="Number of household members (default: 4)")
    parser.add_argument("--candidates", type=int, default=15,
                        help=f"Number of candidate recipes (max {len(DISHES)}, default: 15)")
    parser.add_argument("--seed", type=int, default=SEED,
                        help=f"Faker seed (default: {SEED})")
    args = parser.parse_args()

    session = generate_session(args.members, args.candidates, args.seed)

    output_path = Path(args.output)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(json.dumps(session, indent=2), encoding="utf-8")
    print(f"Written {len(session['candidates'])} candidates and "
          f"{len(session['votes'])} votes to {output_path}")


if __name__ == "__main__":
    main()
