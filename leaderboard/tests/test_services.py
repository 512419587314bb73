import copy
from unittest.mock import patch

from django.db import DatabaseError
from django.test import TestCase, override_settings

from leaderboard import services
from leaderboard.exceptions import (
    CaptchaFailed,
    CaptchaRequired,
    NoPendingScore,
    UpstreamUnavailable,
)
from leaderboard.models import ScoreRecord
from leaderboard.services import PENDING_SCORE_KEY, PendingScore


def make_score(wpm, mode="time", config=30, name="player"):
    return ScoreRecord.objects.create(
        name=name, wpm=wpm, raw_wpm=wpm + 5, accuracy=95, mode=mode, config=config
    )


class ListTopTests(TestCase):
    def test_orders_by_wpm_descending(self):
        for wpm in (80, 60, 95, 40, 70):
            make_score(wpm)
        top = services.list_top("time", 30)
        self.assertEqual([record.wpm for record in top], [95, 80, 70, 60, 40])

    def test_limits_to_ten_and_filters_mode_config(self):
        for wpm in range(12):
            make_score(wpm)
        make_score(500, config=60)
        make_score(600, mode="words", config=25)

        top = services.list_top("time", 30)
        self.assertEqual(len(top), 10)
        self.assertEqual(top[0].wpm, 11)
        self.assertEqual([record.wpm for record in services.list_top("words", 25)], [600])

    def test_ties_keep_insertion_order(self):
        first = make_score(50, name="first")
        second = make_score(50, name="second")
        self.assertEqual(services.list_top("time", 30), [first, second])

    def test_store_errors_become_upstream_unavailable(self):
        with patch.object(ScoreRecord.objects, "filter", side_effect=DatabaseError("gone")):
            with self.assertRaises(UpstreamUnavailable):
                services.list_top("time", 30)


@override_settings(RECAPTCHA_SECRET_KEY="")
class ClaimScoreTests(TestCase):
    def setUp(self):
        self.session = {}
        self.score = PendingScore(wpm=72, raw_wpm=80, accuracy=93, mode="time", config=30)

    def test_claim_without_cached_score_fails(self):
        with self.assertRaises(NoPendingScore):
            services.claim_score(self.session, "aisha", None)
        self.assertFalse(ScoreRecord.objects.exists())

    def test_claim_inserts_cached_numbers_once(self):
        services.cache_score(self.session, self.score)
        record = services.claim_score(self.session, "aisha", None)

        self.assertEqual(record.name, "aisha")
        self.assertEqual(
            (record.wpm, record.raw_wpm, record.accuracy, record.mode, record.config),
            (72, 80, 93, "time", 30),
        )
        self.assertNotIn(PENDING_SCORE_KEY, self.session)
        with self.assertRaises(NoPendingScore):
            services.claim_score(self.session, "aisha", None)
        self.assertEqual(ScoreRecord.objects.count(), 1)

    def test_second_cache_overwrites_first(self):
        services.cache_score(self.session, self.score)
        services.cache_score(self.session, PendingScore(10, 12, 50, "words", 25))
        record = services.claim_score(self.session, "aisha", None)
        self.assertEqual((record.wpm, record.mode, record.config), (10, "words", 25))

    def test_malformed_pending_score_is_ignored(self):
        self.session[PENDING_SCORE_KEY] = {"wpm": "fast"}
        self.assertIsNone(services.get_pending_score(self.session))
        with self.assertRaises(NoPendingScore):
            services.claim_score(self.session, "aisha", None)

    def test_parallel_claims_of_one_cached_score_insert_once(self):
        services.cache_score(self.session, self.score)
        first, second = copy.deepcopy(self.session), copy.deepcopy(self.session)

        record = services.claim_score(first, "aisha", None)
        with self.assertRaises(NoPendingScore):
            services.claim_score(second, "mallory", None)

        self.assertEqual(list(ScoreRecord.objects.all()), [record])
        self.assertEqual(record.claim_token, self.session[PENDING_SCORE_KEY]["token"])
        self.assertNotIn(PENDING_SCORE_KEY, second)

    def test_each_cache_gets_a_new_token(self):
        services.cache_score(self.session, self.score)
        token = self.session[PENDING_SCORE_KEY]["token"]
        services.cache_score(self.session, self.score)
        self.assertTrue(token)
        self.assertNotEqual(self.session[PENDING_SCORE_KEY]["token"], token)

    def test_pending_score_without_token_is_ignored(self):
        self.session[PENDING_SCORE_KEY] = {
            "wpm": 72, "raw_wpm": 80, "accuracy": 93, "mode": "time", "config": 30
        }
        self.assertIsNone(services.get_pending_score(self.session))

    def test_store_failure_keeps_pending_score(self):
        services.cache_score(self.session, self.score)
        with patch.object(ScoreRecord.objects, "create", side_effect=DatabaseError("gone")):
            with self.assertRaises(UpstreamUnavailable):
                services.claim_score(self.session, "aisha", None)
        self.assertIn(PENDING_SCORE_KEY, self.session)


@override_settings(RECAPTCHA_SECRET_KEY="secret")
class ClaimScoreCaptchaTests(TestCase):
    def setUp(self):
        self.session = {}
        services.cache_score(
            self.session, PendingScore(wpm=50, raw_wpm=55, accuracy=90, mode="words", config=25)
        )

    def test_missing_token_rejected(self):
        with self.assertRaises(CaptchaRequired):
            services.claim_score(self.session, "aisha", "")
        self.assertFalse(ScoreRecord.objects.exists())
        self.assertIn(PENDING_SCORE_KEY, self.session)

    @patch("leaderboard.captcha.CaptchaVerifier.verify", return_value=False)
    def test_rejected_token(self, verify):
        with self.assertRaises(CaptchaFailed):
            services.claim_score(self.session, "aisha", "bad", remote_ip="10.0.0.1")
        verify.assert_called_once_with("bad", remote_ip="10.0.0.1")
        self.assertFalse(ScoreRecord.objects.exists())
        self.assertIn(PENDING_SCORE_KEY, self.session)

    @patch("leaderboard.captcha.CaptchaVerifier.verify", return_value=True)
    def test_accepted_token(self, verify):
        record = services.claim_score(self.session, "aisha", "good")
        self.assertEqual(record.wpm, 50)
        self.assertNotIn(PENDING_SCORE_KEY, self.session)

    @patch(
        "leaderboard.captcha.CaptchaVerifier.verify",
        side_effect=UpstreamUnavailable("Recaptcha verification error"),
    )
    def test_verifier_outage(self, verify):
        with self.assertRaises(UpstreamUnavailable):
            services.claim_score(self.session, "aisha", "good")
        self.assertIn(PENDING_SCORE_KEY, self.session)


class ResetLeaderboardTests(TestCase):
    def test_reset_removes_everything(self):
        make_score(10)
        make_score(20, mode="words", config=10)
        self.assertEqual(services.reset_leaderboard(), 2)
        self.assertFalse(ScoreRecord.objects.exists())
