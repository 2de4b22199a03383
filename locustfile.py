"""
Load test for POST /quotes/analyze.

Run: locust -f locustfile.py --host http://localhost:3000
Requires the AI service to be reachable from the API under test.
"""

import random

from locust import HttpUser, between, task

VENDORS = ["AWS", "Microsoft Azure", "Google Cloud", "OVHcloud", "Scaleway", "IONOS"]
CATEGORIES = ["Cloud & Infrastructure", "Cybersecurity", "DevOps & CI/CD"]


def _quote(vendor):
    return {
        "vendorName": vendor,
        "content": (
            f"Devis {vendor} : hébergement managé, 3 serveurs, support 24/7, "
            f"{random.randint(800, 5000)} EUR par mois, engagement 12 mois."
        ),
        "category": random.choice(CATEGORIES),
    }


class QuoteAnalyzerUser(HttpUser):
    wait_time = between(1, 2)

    @task(5)
    def analyze_quotes(self):
        # between 2 and 4 vendors per request
        sample = random.sample(VENDORS, random.randint(2, 4))
        self.client.post(
            "/quotes/analyze",
            json={"quotes": [_quote(v) for v in sample]},
            timeout=60,
        )

    @task(1)
    def categories(self):
        self.client.get("/quotes/categories")

    @task(1)
    def health(self):
        self.client.get("/quotes/health")
