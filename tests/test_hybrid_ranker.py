import unittest

from application.services.corpus_statistics import build_statistics
from application.services.hybrid_ranker import RankingWeights, collapse_intents, rank
from domain.entities import CorpusEntry, ScoredCandidate


def _entry(entry_id, question, vector, keyword=None, intent=None):
    return CorpusEntry(
        id=entry_id,
        question=question,
        answer=f"answer {entry_id}",
        keyword=keyword,
        intent=intent,
        vector=tuple(vector),
    )


class TestHybridRanker(unittest.TestCase):
    def test_keyword_overlap_decides_when_embeddings_are_equal(self):
        corpus = [
            _entry("water", "Is drinking water available?", [1.0, 0.0], keyword="drinking water"),
            _entry("hostel", "How is the hostel food?", [1.0, 0.0], keyword="hostel food"),
        ]
        stats = build_statistics(corpus)
        results = rank([1.0, 0.0], corpus, stats, "mess food for hostel students")
        self.assertEqual([c.id for c in results], ["hostel", "water"])
        self.assertGreater(results[0].score, results[1].score)

    def test_keyword_only_when_query_vector_missing(self):
        corpus = [
            _entry("water", "Is drinking water available?", [1.0, 0.0], keyword="drinking water"),
            _entry("hostel", "How is the hostel food?", [0.0, 1.0], keyword="hostel food"),
        ]
        stats = build_statistics(corpus)
        results = rank([], corpus, stats, "mess food for hostel students")
        self.assertEqual(results[0].id, "hostel")
        self.assertEqual(results[0].semantic, 0.0)
        self.assertEqual(results[1].score, 0.0)

    def test_short_and_long_query_weights(self):
        short_corpus = [_entry("fees", "fees", [1.0, 0.0], keyword="fees")]
        results = rank([0.0, 1.0], short_corpus, build_statistics(short_corpus), "fees")
        self.assertAlmostEqual(results[0].score, 0.30 + 0.05)

        long_corpus = [_entry("fees", "fees", [1.0, 0.0], keyword="fees amount school details")]
        results = rank([0.0, 1.0], long_corpus, build_statistics(long_corpus), "school fees amount details")
        self.assertAlmostEqual(results[0].score, 0.35 + 0.05)

    def test_semantic_weight_for_short_query(self):
        corpus = [_entry("bus", "transport", [1.0, 0.0])]
        results = rank([1.0, 0.0], corpus, build_statistics(corpus), "fees")
        self.assertAlmostEqual(results[0].score, 0.70)
        self.assertAlmostEqual(results[0].keyword, 0.0)

    def test_custom_weights(self):
        corpus = [_entry("bus", "transport", [1.0, 0.0])]
        weights = RankingWeights(short_semantic=0.5, short_keyword=0.5)
        results = rank([1.0, 0.0], corpus, build_statistics(corpus), "fees", weights=weights)
        self.assertAlmostEqual(results[0].score, 0.5)

    def test_intent_variants_collapse_to_best(self):
        corpus = [
            _entry("fees-2", "Fee structure for the school", [0.0, 1.0], intent="fees"),
            _entry("fees-1", "What are the fees", [1.0, 0.0], intent="fees"),
            _entry("hostel", "Hostel timings", [0.5, 0.5]),
        ]
        results = rank([1.0, 0.0], corpus, build_statistics(corpus), "fees")
        fee_ids = [c.id for c in results if c.intent == "fees"]
        self.assertEqual(fee_ids, ["fees-1"])
        self.assertEqual(len(results), 2)

    def test_entries_without_vectors_are_omitted(self):
        corpus = [
            _entry("no-vector", "hostel food", []),
            _entry("hostel", "hostel food", [1.0, 0.0]),
        ]
        results = rank([1.0, 0.0], corpus, build_statistics(corpus), "hostel food")
        self.assertEqual([c.id for c in results], ["hostel"])

    def test_ties_keep_corpus_order_and_limit(self):
        corpus = [_entry(str(i), "library timings", [1.0, 0.0]) for i in range(6)]
        stats = build_statistics(corpus)
        results = rank([1.0, 0.0], corpus, stats, "library timings", limit=3)
        self.assertEqual([c.id for c in results], ["0", "1", "2"])
        self.assertEqual(rank([1.0, 0.0], corpus, stats, "library", limit=0), [])

    def test_ranking_is_deterministic(self):
        corpus = [
            _entry("a", "school bus routes", [0.2, 0.9, 0.1]),
            _entry("b", "hostel food menu", [0.7, 0.1, 0.3]),
            _entry("c", "library timings", [0.4, 0.4, 0.4]),
        ]
        stats = build_statistics(corpus)
        first = rank([0.5, 0.3, 0.2], corpus, stats, "hostel menu")
        second = rank([0.5, 0.3, 0.2], corpus, stats, "hostel menu")
        self.assertEqual(first, second)

    def test_statistics_from_other_snapshot_rejected(self):
        corpus = [_entry("a", "school bus", [1.0]), _entry("b", "hostel food", [1.0])]
        other_stats = build_statistics(corpus[:1])
        with self.assertRaises(ValueError):
            rank([1.0], corpus, other_stats, "bus")

    def test_collapse_keeps_earlier_on_equal_scores(self):
        first = ScoredCandidate(entry=_entry("x", "q", [1.0], intent="i"), score=0.5, position=0)
        second = ScoredCandidate(entry=_entry("y", "q", [1.0], intent="i"), score=0.5, position=1)
        plain = ScoredCandidate(entry=_entry("z", "q", [1.0]), score=0.1, position=2)
        self.assertEqual(collapse_intents([first, second, plain]), [first, plain])


if __name__ == "__main__":
    unittest.main()
