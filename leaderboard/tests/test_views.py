from unittest.mock import patch

from django.test import TestCase, override_settings
from rest_framework.test import APIClient

from leaderboard.exceptions import UpstreamUnavailable
from leaderboard.models import ScoreRecord


SCORE = {"wpm": 64, "raw_wpm": 70, "accuracy": 94, "mode": "time", "config": 30}


@override_settings(
    RECAPTCHA_SECRET_KEY="",
    TYPING_ALLOWED_CONFIGS={"time": [15, 30, 60, 120], "words": [10, 25, 50, 100]},
)
class LeaderboardAPITests(TestCase):
    def setUp(self):
        self.client = APIClient()

    def test_get_returns_ranked_scores(self):
        for wpm in (80, 60, 95, 40, 70):
            ScoreRecord.objects.create(name=f"p{wpm}", wpm=wpm, raw_wpm=wpm, accuracy=90, mode="time", config=30)
        ScoreRecord.objects.create(name="other", wpm=200, raw_wpm=200, accuracy=90, mode="time", config=60)

        resp = self.client.get("/api/leaderboard", {"mode": "time", "config": 30})
        self.assertEqual(resp.status_code, 200)
        body = resp.json()
        self.assertEqual([row["wpm"] for row in body], [95, 80, 70, 60, 40])
        self.assertEqual(
            set(body[0]),
            {"id", "name", "wpm", "raw_wpm", "accuracy", "mode", "config", "created_at"},
        )

    def test_get_rejects_bad_query(self):
        for params in ({"mode": "zen", "config": 30}, {"mode": "time", "config": 45}, {"mode": "time"}):
            resp = self.client.get("/api/leaderboard", params)
            self.assertEqual(resp.status_code, 400)
            self.assertIn("error", resp.json())

    @patch("leaderboard.views.services.list_top", side_effect=UpstreamUnavailable())
    def test_get_store_error(self, list_top):
        resp = self.client.get("/api/leaderboard", {"mode": "time", "config": 30})
        self.assertEqual(resp.status_code, 500)
        self.assertEqual(resp.json(), {"error": "Internal server error"})

    def test_cache_then_claim(self):
        resp = self.client.post("/api/session-score", SCORE, format="json")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json(), {"success": True})

        resp = self.client.post("/api/leaderboard", {"name": "Aisha"}, format="json")
        self.assertEqual(resp.status_code, 201)
        record = ScoreRecord.objects.get(id=resp.json()["id"])
        self.assertEqual((record.name, record.wpm, record.raw_wpm, record.accuracy), ("Aisha", 64, 70, 94))

        resp = self.client.post("/api/leaderboard", {"name": "Aisha"}, format="json")
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json(), {"error": "No test attempt found in session"})
        self.assertEqual(ScoreRecord.objects.count(), 1)

    def test_claim_without_cached_score(self):
        resp = self.client.post("/api/leaderboard", {"name": "Aisha", "recaptchaToken": "x"}, format="json")
        self.assertEqual(resp.status_code, 400)
        self.assertFalse(ScoreRecord.objects.exists())

    def test_claim_ignores_numbers_in_body(self):
        self.client.post("/api/session-score", SCORE, format="json")
        resp = self.client.post(
            "/api/leaderboard",
            {"name": "Aisha", "wpm": 999, "raw_wpm": 999, "accuracy": 100},
            format="json",
        )
        self.assertEqual(resp.status_code, 201)
        self.assertEqual(ScoreRecord.objects.get().wpm, 64)

    def test_pending_scores_are_per_session(self):
        self.client.post("/api/session-score", SCORE, format="json")
        stranger = APIClient()
        resp = stranger.post("/api/leaderboard", {"name": "Mallory"}, format="json")
        self.assertEqual(resp.status_code, 400)

    def test_claim_requires_name(self):
        self.client.post("/api/session-score", SCORE, format="json")
        for body in ({}, {"name": "   "}, {"name": "x" * 256}):
            resp = self.client.post("/api/leaderboard", body, format="json")
            self.assertEqual(resp.status_code, 400)
            self.assertIn("name", resp.json()["fields"])
        self.assertEqual(self.client.post("/api/leaderboard", {"name": "ok"}, format="json").status_code, 201)

    def test_session_score_validation(self):
        bad_bodies = [
            {**SCORE, "wpm": -1},
            {**SCORE, "accuracy": 101},
            {**SCORE, "mode": "zen"},
            {**SCORE, "config": 31},
            {key: value for key, value in SCORE.items() if key != "raw_wpm"},
        ]
        for body in bad_bodies:
            resp = self.client.post("/api/session-score", body, format="json")
            self.assertEqual(resp.status_code, 400, body)

    @override_settings(RECAPTCHA_SECRET_KEY="secret")
    def test_captcha_enforced_when_configured(self):
        self.client.post("/api/session-score", SCORE, format="json")

        resp = self.client.post("/api/leaderboard", {"name": "Aisha"}, format="json")
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json(), {"error": "Recaptcha token is missing"})

        with patch("leaderboard.captcha.CaptchaVerifier.verify", return_value=False):
            resp = self.client.post("/api/leaderboard", {"name": "Aisha", "recaptchaToken": "bad"}, format="json")
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json(), {"error": "Recaptcha verification failed"})

        with patch("leaderboard.captcha.CaptchaVerifier.verify", return_value=True):
            resp = self.client.post("/api/leaderboard", {"name": "Aisha", "recaptchaToken": "good"}, format="json")
        self.assertEqual(resp.status_code, 201)

    @override_settings(RECAPTCHA_SECRET_KEY="secret")
    def test_captcha_outage_is_server_error(self):
        self.client.post("/api/session-score", SCORE, format="json")
        with patch(
            "leaderboard.captcha.CaptchaVerifier.verify",
            side_effect=UpstreamUnavailable("Recaptcha verification error"),
        ):
            resp = self.client.post("/api/leaderboard", {"name": "Aisha", "recaptchaToken": "t"}, format="json")
        self.assertEqual(resp.status_code, 500)
        self.assertEqual(resp.json(), {"error": "Recaptcha verification error"})

    @override_settings(RECAPTCHA_SITE_KEY="site-key")
    def test_config_endpoint(self):
        resp = self.client.get("/api/config")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(
            resp.json(),
            {"modes": {"time": [15, 30, 60, 120], "words": [10, 25, 50, 100]}, "recaptchaSiteKey": "site-key"},
        )
