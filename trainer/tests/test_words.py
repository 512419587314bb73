import random

from django.test import SimpleTestCase

from trainer.corpus import DHIVEHI_WORDS
from trainer.words import WordPool


class WordPoolTests(SimpleTestCase):
    def setUp(self):
        self.pool = WordPool(["a", "b", "c", "d", "e"], rng=random.Random(7))

    def test_sample_draws_without_replacement(self):
        words = self.pool.sample(4)
        self.assertEqual(len(words), 4)
        self.assertEqual(len(set(words)), 4)
        self.assertTrue(set(words) <= {"a", "b", "c", "d", "e"})

    def test_full_sample_is_a_permutation(self):
        self.assertCountEqual(self.pool.sample(5), ["a", "b", "c", "d", "e"])

    def test_oversized_sample_chains_shuffles(self):
        words = self.pool.sample(12)
        self.assertEqual(len(words), 12)
        self.assertCountEqual(words[:5], ["a", "b", "c", "d", "e"])
        self.assertCountEqual(words[5:10], ["a", "b", "c", "d", "e"])
        for left, right in zip(words, words[1:]):
            self.assertNotEqual(left, right)

    def test_seeded_pools_repeat(self):
        first = WordPool(DHIVEHI_WORDS, rng=random.Random(3)).sample(10)
        second = WordPool(DHIVEHI_WORDS, rng=random.Random(3)).sample(10)
        self.assertEqual(first, second)

    def test_invalid_counts(self):
        for count in (0, -1, True, 2.0):
            with self.assertRaises(ValueError):
                self.pool.sample(count)

    def test_corpus_is_deduplicated(self):
        self.assertEqual(len(WordPool(["a", "a", "b", ""])), 2)

    def test_empty_corpus_rejected(self):
        with self.assertRaises(ValueError):
            WordPool([])

    def test_builtin_corpus_covers_a_fifty_word_test(self):
        self.assertGreaterEqual(len(WordPool()), 50)
