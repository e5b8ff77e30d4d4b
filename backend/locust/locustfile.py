"""
Locust Load Test Suite

Run scenarios:
  locust -f locustfile.py --tags concurrency  # Many members, one seat
  locust -f locustfile.py --tags throughput   # Directory cache and live views
  locust -f locustfile.py --tags edge         # Bad input
  locust -f locustfile.py                     # All tests
"""

import random
import string
from datetime import date, timedelta
from locust import HttpUser, task, between, tag, events

# Shared state
MEMBER_IDS = []
CONTESTED_SEAT = 1


def random_name():
    return "Load " + "".join(random.choices(string.ascii_lowercase, k=8)).title()


def weekday_index(day: date) -> int:
    return day.isoweekday() % 7


def contested_schedule(member_id: str) -> dict:
    """Every user asks for the same seat, the same mornings, the same month."""
    start = date.today() + timedelta(days=30)
    return {
        "member_id": member_id,
        "seat_number": CONTESTED_SEAT,
        "start_date": start.isoformat(),
        "end_date": (start + timedelta(days=29)).isoformat(),
        "start_time": "09:00",
        "end_time": "12:00",
        "days_of_week": list(range(7)),
        "amount": 150,
        "paid_amount": 0,
    }


@events.test_start.add_listener
def on_test_start(environment, **kwargs):
    print("\n" + "=" * 60)
    print(f"SETUP: members will contend for seat {CONTESTED_SEAT}")
    print("=" * 60)


class ConcurrencyUser(HttpUser):
    """
    TEST 1: Concurrency - 100 members -> 1 seat

    Run: locust -f locustfile.py --tags concurrency -u 100 -r 50 --run-time 30s

    After test, verify exactly one booking holds the seat for the schedule:
      SELECT COUNT(*) FROM bookings WHERE seat_number = 1;
    Should be 1
    """
    wait_time = between(0, 0.1)

    def on_start(self):
        resp = self.client.post("/api/v1/members/", json={"name": random_name()})
        self.member_id = resp.json()["id"] if resp.status_code == 201 else None

    @tag("concurrency")
    @task
    def book_contested_seat(self):
        if not self.member_id:
            return

        with self.client.post(
            "/api/v1/bookings/",
            json=contested_schedule(self.member_id),
            catch_response=True,
        ) as resp:
            if resp.status_code in (201, 409):
                resp.success()  # 409: seat already taken
            else:
                resp.failure(f"Unexpected: {resp.status_code}")


class ThroughputUser(HttpUser):
    """
    TEST 2: Throughput - member directory cache and live views

    Run twice, with and without Redis:
      locust -f locustfile.py --tags throughput -u 100 -r 20 --run-time 60s

    Compare avg response time, requests/sec and P95/P99 latency on the
    directory. Seat map and dashboard are never cached.
    """
    wait_time = between(0.1, 0.5)

    @tag("throughput", "read")
    @task(10)
    def member_directory(self):
        self.client.get("/api/v1/members/?sort_by=dues", name="/api/v1/members/ [cached]")

    @tag("throughput", "read")
    @task(5)
    def seat_map(self):
        self.client.get("/api/v1/occupancy/seats")

    @tag("throughput", "read")
    @task(3)
    def dashboard(self):
        self.client.get("/api/v1/dashboard")

    @tag("throughput", "read")
    @task(1)
    def timeline(self):
        self.client.get("/api/v1/occupancy/timeline")

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

    def on_start(self):
        resp = self.client.post("/api/v1/members/", json={"name": random_name()})
        self.member_id = resp.json()["id"] if resp.status_code == 201 else "MISSING00"

    def _expect(self, payload, allowed, name):
        with self.client.post("/api/v1/bookings/", json=payload, name=name, catch_response=True) as resp:
            if resp.status_code in allowed:
                resp.success()
            else:
                resp.failure(f"Expected {allowed}, got {resp.status_code}")

    @tag("edge")
    @task
    def unknown_member(self):
        payload = contested_schedule("NOBODY000")
        self._expect(payload, (404,), "unknown member")

    @tag("edge")
    @task
    def start_weekday_not_selected(self):
        payload = contested_schedule(self.member_id)
        anchor = weekday_index(date.fromisoformat(payload["start_date"]))
        payload["days_of_week"] = [d for d in range(7) if d != anchor]
        self._expect(payload, (400,), "anchor day missing")

    @tag("edge")
    @task
    def inverted_window(self):
        payload = contested_schedule(self.member_id)
        payload["start_time"], payload["end_time"] = "18:00", "09:00"
        self._expect(payload, (400,), "inverted window")

    @tag("edge")
    @task
    def huge_seat_number(self):
        payload = contested_schedule(self.member_id)
        payload["seat_number"] = 999999
        self._expect(payload, (400,), "seat out of range")

    @tag("edge")
    @task
    def malformed_json(self):
        with self.client.post(
            "/api/v1/bookings/",
            data="not json at all",
            catch_response=True,
        ) as resp:
            if resp.status_code in [400, 422]:
                resp.success()
            else:
                resp.failure(f"Expected 400/422, got {resp.status_code}")


class RealisticUser(HttpUser):
    """
    TEST 4: Realistic mixed workload

    Run: locust -f locustfile.py -u 200 -r 20 --run-time 120s

    Front-desk traffic: mostly looking at the seat map and directory,
    some bookings on random seats, rare registrations.
    """
    wait_time = between(1, 3)

    @task(40)
    def browse_seat_map(self):
        self.client.get("/api/v1/occupancy/seats")

    @task(20)
    def browse_directory(self):
        resp = self.client.get("/api/v1/members/")
        if resp.status_code == 200:
            for row in resp.json():
                if row["id"] not in MEMBER_IDS:
                    MEMBER_IDS.append(row["id"])

    @task(10)
    def book_random_seat(self):
        if not MEMBER_IDS:
            return
        start = date.today() + timedelta(days=random.randint(0, 60))
        hour = random.randint(7, 18)
        self.client.post(
            "/api/v1/bookings/",
            json={
                "member_id": random.choice(MEMBER_IDS),
                "seat_number": random.randint(1, 40),
                "start_date": start.isoformat(),
                "end_date": (start + timedelta(days=6)).isoformat(),
                "start_time": f"{hour:02d}:00",
                "end_time": f"{hour + 3:02d}:00",
                "days_of_week": list(range(7)),
                "amount": 150,
                "paid_amount": random.choice([0, 75, 150]),
            },
            name="/api/v1/bookings/ [random]",
        )

    @task(3)
    def register_member(self):
        resp = self.client.post("/api/v1/members/", json={"name": random_name()})
        if resp.status_code == 201:
            MEMBER_IDS.append(resp.json()["id"])
