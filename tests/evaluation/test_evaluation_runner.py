import importlib.util
import unittest

from application.evaluation.models import EvalCase
from application.evaluation.runner import run_evaluation
from domain.entities import ChatAnswer, CorpusEntry, ScoredCandidate

ENTRIES = [
    CorpusEntry(id="hostel", question="Hostel food timings", answer="7:30", keyword="hostel food timings", vector=(1.0,)),
    CorpusEntry(id="water", question="Drinking water", answer="Every floor", keyword="drinking water", vector=(1.0,)),
    CorpusEntry(id="library", question="Library hours", answer="9 to 5", keyword="library books hours", vector=(1.0,)),
]


class TestRunEvaluation(unittest.TestCase):
    def test_ranking_and_answer_metrics(self):
        def rank_fn(text: str, limit: int):
            order = ["water", "hostel"] if "water" in text else ["hostel", "water"]
            by_id = {entry.id: entry for entry in ENTRIES}
            return [ScoredCandidate(entry=by_id[i], score=1.0 - n / 10) for n, i in enumerate(order)][:limit]

        def answer_fn(text: str) -> ChatAnswer:
            if "canteen" in text:
                return ChatAnswer(answer="fallback", via="low-score")
            return ChatAnswer(answer="x", via="semantic-match", entry_id="hostel")

        cases = [
            EvalCase("hostel food", expected_id="hostel"),
            EvalCase("is water clean", expected_id="water"),
            EvalCase("canteen menu", expected_id=None),
        ]
        run = run_evaluation(cases, rank_fn, answer_fn=answer_fn, top_k=2)

        self.assertEqual(run.case_results[1].ranked_ids, ["water", "hostel"])
        self.assertAlmostEqual(run.aggregate_metrics["hit@1"], 1.0)
        self.assertAlmostEqual(run.aggregate_metrics["mrr@2"], 1.0)
        self.assertAlmostEqual(run.aggregate_metrics["answer_accuracy"], 2 / 3)
        self.assertNotIn("hit@1", run.case_results[2].metrics)
        self.assertEqual(run.case_results[2].via, "low-score")


@unittest.skipIf(importlib.util.find_spec("rank_bm25") is None, "rank_bm25 not installed")
class TestBM25Baseline(unittest.TestCase):
    def test_ranks_by_keywords(self):
        from application.evaluation.baselines import BM25Baseline

        baseline = BM25Baseline()
        baseline.update_entries(ENTRIES)
        results = baseline.rank("hostel food", limit=2)
        self.assertEqual(results[0].id, "hostel")
        self.assertEqual(len(results), 2)
        self.assertEqual(baseline.rank("", limit=2), [])

    def test_index_rebuilt_only_when_corpus_changes(self):
        from application.evaluation.baselines import BM25Baseline

        baseline = BM25Baseline()
        baseline.update_entries(ENTRIES)
        state = baseline._state
        baseline.update_entries(list(ENTRIES))
        self.assertIs(baseline._state, state)
        baseline.update_entries(ENTRIES[:2])
        self.assertIsNot(baseline._state, state)

    def test_empty_corpus(self):
        from application.evaluation.baselines import BM25Baseline

        baseline = BM25Baseline()
        baseline.update_entries([])
        self.assertEqual(baseline.rank("hostel"), [])


if __name__ == "__main__":
    unittest.main()
