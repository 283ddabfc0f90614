import unittest

from fastapi.testclient import TestClient

from slot_machine.config import settings
from slot_machine.core.reels import ReelBank
from slot_machine.main import create_app
from slot_machine.routers import api

from conftest import ScriptedRNG, CHERRY_STOP, LEMON_STOP, ORANGE_STOP, SEVEN_STOP


class TestSlotMachineApi(unittest.TestCase):

    def setUp(self):
        # Create a new app instance for each test to ensure a clean state
        self.app = create_app()
        self.client = TestClient(self.app)
        api.limiter.reset()
        settings.rate_limit.enabled = False

    def tearDown(self):
        settings.rate_limit.enabled = True
        api.limiter.reset()

    def _new_session(self, name="Ada", *stops):
        response = self.client.post("/api/sessions", json={"name": name})
        self.assertEqual(response.status_code, 200)
        session_id = response.json()["session_id"]
        if stops:
            api.sessions.get(session_id).reel_bank = ReelBank(rng=ScriptedRNG(*stops))
        return session_id

    def test_paytable(self):
        response = self.client.get("/api/paytable")
        self.assertEqual(response.status_code, 200)

        data = response.json()
        seven = next(s for s in data["symbols"] if s["symbol"] == "SEVEN")
        self.assertEqual(seven["multiplier"], 20)
        self.assertEqual(seven["weight"], 1)
        self.assertEqual(seven["probability"], 0.02)
        self.assertEqual(sum(s["weight"] for s in data["symbols"]), 50)
        self.assertEqual(data["jackpot"]["multiplier"], 50)

    def test_create_session(self):
        response = self.client.post("/api/sessions", json={"name": "  Ada  "})
        data = response.json()

        self.assertEqual(data["name"], "Ada")
        self.assertEqual(data["credits"], settings.game.starting_credits)

        status = self.client.get(f"/api/sessions/{data['session_id']}").json()
        self.assertEqual(status["account"]["name"], "Ada")
        self.assertFalse(status["game_over"])

    def test_jackpot_spin(self):
        session_id = self._new_session("Ada", SEVEN_STOP)

        response = self.client.post(f"/api/sessions/{session_id}/spin", json={"bet": 10})
        self.assertEqual(response.status_code, 200)

        data = response.json()
        self.assertEqual(data["reels"], ["SEVEN", "SEVEN", "SEVEN"])
        self.assertEqual(data["winnings"], 700)
        self.assertTrue(data["is_jackpot"])
        self.assertEqual(data["lines"][0]["line_winnings"], 200)
        self.assertEqual(data["lines"][0]["jackpot_bonus"], 500)
        self.assertEqual(data["balance"], settings.game.starting_credits - 10 + 700)

    def test_losing_spin(self):
        session_id = self._new_session("Ada", CHERRY_STOP, LEMON_STOP, ORANGE_STOP)

        data = self.client.post(f"/api/sessions/{session_id}/spin", json={"bet": 5}).json()

        self.assertFalse(data["win"])
        self.assertEqual(data["lines"], [])
        self.assertEqual(data["net"], -5)

    def test_invalid_bet_rejected(self):
        session_id = self._new_session()
        balance = settings.game.starting_credits

        for bet in (0, -1, balance + 1):
            response = self.client.post(f"/api/sessions/{session_id}/spin", json={"bet": bet})
            self.assertEqual(response.status_code, 400, bet)

        status = self.client.get(f"/api/sessions/{session_id}").json()
        self.assertEqual(status["account"]["credits"], balance)

    def test_out_of_credits(self):
        session_id = self._new_session("Ada", CHERRY_STOP, LEMON_STOP, ORANGE_STOP)
        balance = settings.game.starting_credits

        data = self.client.post(f"/api/sessions/{session_id}/spin", json={"bet": balance}).json()
        self.assertTrue(data["game_over"])
        self.assertEqual(data["summary"]["balance"], 0)
        self.assertEqual(data["summary"]["result"], "loss")

        # The finished session is freed
        response = self.client.post(f"/api/sessions/{session_id}/spin", json={"bet": 1})
        self.assertEqual(response.status_code, 404)

    def test_unknown_session(self):
        self.assertEqual(self.client.get("/api/sessions/nope").status_code, 404)
        response = self.client.post("/api/sessions/nope/spin", json={"bet": 1})
        self.assertEqual(response.status_code, 404)

    def test_end_session(self):
        session_id = self._new_session("Ada", CHERRY_STOP)
        self.client.post(f"/api/sessions/{session_id}/spin", json={"bet": 10})

        summary = self.client.delete(f"/api/sessions/{session_id}").json()
        self.assertEqual(summary["rounds_played"], 1)
        self.assertEqual(summary["result"], "profit")

        self.assertEqual(self.client.get(f"/api/sessions/{session_id}").status_code, 404)

    def test_spin_rate_limit(self):
        settings.rate_limit.enabled = True
        original = settings.rate_limit.spin_requests
        settings.rate_limit.spin_requests = "3/minute"
        try:
            session_id = self._new_session("Ada", CHERRY_STOP)
            endpoint = f"/api/sessions/{session_id}/spin"

            for i in range(3):
                response = self.client.post(endpoint, json={"bet": 1})
                self.assertNotEqual(response.status_code, 429, f"Request {i + 1} was limited")

            response = self.client.post(endpoint, json={"bet": 1})
            self.assertEqual(response.status_code, 429)
        finally:
            settings.rate_limit.spin_requests = original

    def test_session_creation_rate_limit(self):
        settings.rate_limit.enabled = True
        original = settings.rate_limit.session_requests
        settings.rate_limit.session_requests = "2/minute"
        try:
            for i in range(2):
                response = self.client.post("/api/sessions", json={"name": "Ada"})
                self.assertEqual(response.status_code, 200, f"Request {i + 1} was limited")

            response = self.client.post("/api/sessions", json={"name": "Ada"})
            self.assertEqual(response.status_code, 429)
        finally:
            settings.rate_limit.session_requests = original

    def test_health(self):
        response = self.client.get("/health")
        self.assertEqual(response.json()["status"], "ok")


if __name__ == "__main__":
    unittest.main()
