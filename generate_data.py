# generate_data.py
import json
import random
import argparse # Import argparse
from pathlib import Path
from faker import Faker

# Setup argument parser
parser = argparse.ArgumentParser(description="Generate a dummy product transaction dataset.")
parser.add_argument("--rows", type=int, default=60, help="Number of transactions to generate")
parser.add_argument("--output", default="dummy_transactions.json", help="Where to write the JSON array")
args = parser.parse_args()

CATEGORIES = ["men's clothing", "women's clothing", "jewelery", "electronics"]

fake = Faker()
output_file = Path(args.output)

transactions = []
for transaction_id in range(1, args.rows + 1):
    transactions.append({
        "id": transaction_id,
        "title": fake.catch_phrase(),
        "price": round(random.uniform(5.0, 1000.0), 2),  # nosec B311
        "description": fake.sentence(nb_words=12),
        "category": random.choice(CATEGORIES),  # nosec B311
        "image": fake.image_url(),
        "sold": fake.boolean(),
        "dateOfSale": fake.date_time_between(start_date="-1y", end_date="now").isoformat(),
    })

output_file.write_text(json.dumps(transactions, indent=2), encoding="utf-8")
print(f"Wrote {len(transactions)} transactions to {output_file}")
print(f"Serve them with: SOURCE_FILE={output_file} uvicorn app.main:app --reload")
