import unittest

from application.services.similarity import cosine_similarity, keyword_overlap_score


class TestCosineSimilarity(unittest.TestCase):
    def test_identical_and_opposite_vectors(self):
        v = [0.3, -1.2, 4.0]
        self.assertAlmostEqual(cosine_similarity(v, v), 1.0)
        self.assertAlmostEqual(cosine_similarity(v, [-x for x in v]), -1.0)

    def test_symmetry(self):
        a = [1.0, 2.0, 3.0]
        b = [0.5, -1.0, 2.0]
        self.assertAlmostEqual(cosine_similarity(a, b), cosine_similarity(b, a))

    def test_empty_none_and_zero_norm(self):
        self.assertEqual(cosine_similarity([], [1.0]), 0.0)
        self.assertEqual(cosine_similarity(None, [1.0]), 0.0)
        self.assertEqual(cosine_similarity([1.0], None), 0.0)
        self.assertEqual(cosine_similarity([0.0, 0.0], [1.0, 1.0]), 0.0)

    def test_uses_shorter_length(self):
        self.assertAlmostEqual(cosine_similarity([1.0, 0.0], [1.0, 0.0, 5.0]), 1.0)

    def test_orthogonal(self):
        self.assertAlmostEqual(cosine_similarity([1.0, 0.0], [0.0, 1.0]), 0.0)


class TestKeywordOverlap(unittest.TestCase):
    def test_plain_overlap(self):
        score = keyword_overlap_score(["hostel", "food", "menu", "today"], ["hostel", "food"])
        self.assertAlmostEqual(score, 0.5)

    def test_empty_inputs(self):
        self.assertEqual(keyword_overlap_score([], ["hostel"]), 0.0)
        self.assertEqual(keyword_overlap_score(["hostel"], []), 0.0)
        self.assertEqual(keyword_overlap_score([], ["hostel"], {"hostel": 1.0}), 0.0)

    def test_weighted_overlap(self):
        idf = {"canteen": 3.0, "campus": 1.0}
        self.assertAlmostEqual(keyword_overlap_score(["canteen", "campus"], ["canteen"], idf), 0.75)
        self.assertAlmostEqual(keyword_overlap_score(["canteen", "campus"], ["campus"], idf), 0.25)

    def test_weighted_overlap_uses_unique_tokens(self):
        idf = {"fees": 2.0, "hostel": 2.0}
        score = keyword_overlap_score(["fees", "fees", "hostel"], ["fees"], idf)
        self.assertAlmostEqual(score, 0.5)


if __name__ == "__main__":
    unittest.main()
