"""
Locust Load Test Suite

Run scenarios:
  locust -f locustfile.py --tags contention  # Many bookers racing for one event's MC slot
  locust -f locustfile.py --tags throughput  # Roster and page reads (cache)
  locust -f locustfile.py --tags edge        # Bad input
  locust -f locustfile.py                    # All tests
"""

import random
import string

from locust import HttpUser, between, events, tag, task

# Shared state
EVENT_IDS = []
COMIC_IDS = []
CONTENTION_EVENT_ID = None


def random_name():
    return "Comic " + "".join(random.choices(string.ascii_uppercase, k=6))


@events.test_start.add_listener
def on_test_start(environment, **kwargs):
    print("\n" + "=" * 60)
    print("SETUP: Creating contention test gig and event...")
    print("=" * 60)


class ContentionUser(HttpUser):
    """
    TEST 1: Contention - many bookers, one MC slot

    Run: locust -f locustfile.py --tags contention -u 100 -r 50 --run-time 30s

    After test, verify:
      GET /api/v1/events/{id}/lineup
    Exactly one MC and one HEADLINER, and comic positions 1..N without repeats.
    """
    wait_time = between(0, 0.1)

    def on_start(self):
        resp = self.client.post("/api/v1/comics/", json={"name": random_name()})
        self.comic_id = resp.json()["id"] if resp.status_code == 201 else None

        if not CONTENTION_EVENT_ID:
            resp = self.client.post("/api/v1/gigs/", json={"name": "Contention Night"})
            if resp.status_code == 201:
                gig_id = resp.json()["id"]
                resp = self.client.post(
                    f"/api/v1/gigs/{gig_id}/events",
                    json={"date": "2030-01-01", "time": "20:00"},
                )
                if resp.status_code == 201:
                    globals()["CONTENTION_EVENT_ID"] = resp.json()["id"]
                    print(f"\nCreated event {CONTENTION_EVENT_ID}\n")

    def _assign(self, role):
        if not CONTENTION_EVENT_ID or not self.comic_id:
            return

        with self.client.post(
            f"/api/v1/events/{CONTENTION_EVENT_ID}/lineup",
            json={"comic_id": self.comic_id, "role": role},
            name=f"/api/v1/events/{{id}}/lineup [{role}]",
            catch_response=True,
        ) as resp:
            if resp.status_code == 201:
                resp.success()
            elif resp.status_code == 409 and role != "COMIC":
                resp.success()  # Expected: role taken
            else:
                resp.failure(f"Unexpected: {resp.status_code}")

    @tag("contention")
    @task(3)
    def grab_mc(self):
        self._assign("MC")

    @tag("contention")
    @task(3)
    def grab_headliner(self):
        self._assign("HEADLINER")

    @tag("contention")
    @task(1)
    def add_comic_slot(self):
        """Comic slots never conflict; positions are retried server-side."""
        self._assign("COMIC")


class ThroughputUser(HttpUser):
    """
    TEST 2: Throughput - Cache effectiveness

    Run twice:
      1. With Redis: REDIS_ENABLED=true, locust -f locustfile.py --tags throughput -u 100 -r 20 --run-time 60s
      2. Without Redis: run again with REDIS_ENABLED=false

    Compare avg response time and P95/P99 latency of the roster reads.
    """
    wait_time = between(0.1, 0.5)

    @tag("throughput", "read")
    @task(10)
    def list_comics_cached(self):
        self.client.get("/api/v1/comics/", name="/api/v1/comics/ [cached]")

    @tag("throughput", "read")
    @task(3)
    def event_page(self):
        if EVENT_IDS:
            self.client.get(f"/event?id={random.choice(EVENT_IDS)}", name="/event?id=")

    @tag("throughput")
    @task(1)
    def health_check(self):
        self.client.get("/health")


class EdgeCaseUser(HttpUser):
    """
    TEST 3: Edge cases - Bad input handling

    Run: locust -f locustfile.py --tags edge -u 20 -r 5 --run-time 30s

    System should NOT crash, return proper error codes.
    """
    wait_time = between(0.5, 1.5)

    def _expect(self, resp, codes):
        if resp.status_code in codes:
            resp.success()
        else:
            resp.failure(f"Expected {codes}, got {resp.status_code}")

    @tag("edge")
    @task
    def unknown_event(self):
        with self.client.post(
            "/api/v1/events/999999/lineup",
            json={"comic_id": 1, "role": "MC"},
            catch_response=True,
        ) as resp:
            self._expect(resp, [404])

    @tag("edge")
    @task
    def unknown_role(self):
        with self.client.post(
            "/api/v1/events/1/lineup",
            json={"comic_id": 1, "role": "OPENER"},
            catch_response=True,
        ) as resp:
            self._expect(resp, [404, 422])

    @tag("edge")
    @task
    def blank_comic_name(self):
        with self.client.post("/api/v1/comics/", json={"name": ""}, catch_response=True) as resp:
            self._expect(resp, [422])

    @tag("edge")
    @task
    def malformed_page_id(self):
        with self.client.get("/event?id=abc", name="/event?id=abc", catch_response=True) as resp:
            self._expect(resp, [404])

    @tag("edge")
    @task
    def malformed_json(self):
        with self.client.post("/api/v1/gigs/", data="not json at all", catch_response=True) as resp:
            self._expect(resp, [400, 422])


class RealisticUser(HttpUser):
    """
    TEST 4: Realistic mixed workload

    Run: locust -f locustfile.py -u 50 -r 10 --run-time 120s

    Mostly browsing gig and event pages, some booking, rare creates.
    """
    wait_time = between(1, 3)

    @task(30)
    def browse_gigs(self):
        resp = self.client.get("/api/v1/gigs/")
        if resp.status_code != 200 or not resp.json():
            return
        gig_id = random.choice(resp.json())["id"]
        resp = self.client.get(f"/api/v1/gigs/{gig_id}", name="/api/v1/gigs/{id}")
        if resp.status_code == 200:
            for display in resp.json()["events"]:
                if display["event"]["id"] not in EVENT_IDS:
                    EVENT_IDS.append(display["event"]["id"])

    @task(20)
    def view_event(self):
        if EVENT_IDS:
            self.client.get(f"/event?id={random.choice(EVENT_IDS)}", name="/event?id=")

    @task(10)
    def book_comic(self):
        if EVENT_IDS and COMIC_IDS:
            self.client.post(
                f"/api/v1/events/{random.choice(EVENT_IDS)}/lineup",
                json={"comic_id": random.choice(COMIC_IDS), "role": "COMIC"},
                name="/api/v1/events/{id}/lineup",
            )

    @task(3)
    def create_comic(self):
        resp = self.client.post("/api/v1/comics/", json={"name": random_name(), "default_fee": "40"})
        if resp.status_code == 201:
            COMIC_IDS.append(resp.json()["id"])

    @task(1)
    def create_event(self):
        resp = self.client.get("/api/v1/gigs/")
        if resp.status_code == 200 and resp.json():
            gig_id = random.choice(resp.json())["id"]
            resp = self.client.post(
                f"/api/v1/gigs/{gig_id}/events",
                json={"date": f"2030-{random.randint(1, 12):02d}-{random.randint(1, 28):02d}", "time": "20:00"},
                name="/api/v1/gigs/{id}/events",
            )
            if resp.status_code == 201:
                EVENT_IDS.append(resp.json()["id"])
