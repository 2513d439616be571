import os
import unittest
from unittest import mock

import requests

from application.services.spelling import Vocabulary
from domain.entities import Query
from infrastructure.embedding.gemini_embedder import GeminiEmbedder
from infrastructure.llm.gemini_client import GeminiClient, GeminiConfig
from infrastructure.query.gemini_rewriter import GeminiQueryRewriter, looks_corrupted
from infrastructure.query.gemini_validator import GeminiMeaningValidator


def _response(payload):
    response = mock.Mock()
    response.json.return_value = payload
    response.raise_for_status.return_value = None
    return response


def _generate_payload(text: str) -> dict:
    return {"candidates": [{"content": {"parts": [{"text": text}]}}]}


class TestGeminiClient(unittest.TestCase):
    def setUp(self) -> None:
        self.session = mock.Mock()
        self.client = GeminiClient(GeminiConfig(api_key="test-key", timeout=3.0), session=self.session)

    def test_embed_returns_values(self):
        self.session.post.return_value = _response({"embedding": {"values": [0.1, 0.2]}})
        self.assertEqual(self.client.embed("hostel"), [0.1, 0.2])
        _, kwargs = self.session.post.call_args
        self.assertEqual(kwargs["timeout"], 3.0)
        self.assertEqual(kwargs["params"], {"key": "test-key"})

    def test_generate_returns_stripped_text(self):
        self.session.post.return_value = _response(_generate_payload("  yes \n"))
        self.assertEqual(self.client.generate("prompt", "instruction"), "yes")
        _, kwargs = self.session.post.call_args
        sent = kwargs["json"]["contents"][0]["parts"][0]["text"]
        self.assertEqual(sent, "instruction\n\nUSER: prompt")

    def test_failures_degrade_to_empty(self):
        self.session.post.side_effect = requests.Timeout()
        self.assertEqual(self.client.embed("hostel"), [])
        self.assertEqual(self.client.generate("prompt"), "")

        self.session.post.side_effect = requests.ConnectionError()
        self.assertEqual(self.client.embed("hostel"), [])

        self.session.post.side_effect = None
        self.session.post.return_value = _response({"candidates": []})
        self.assertEqual(self.client.generate("prompt"), "")
        self.session.post.return_value = _response({"unexpected": True})
        self.assertEqual(self.client.embed("hostel"), [])

    def test_missing_api_key_skips_request(self):
        session = mock.Mock()
        client = GeminiClient(GeminiConfig(api_key=None), session=session)
        with mock.patch.dict(os.environ, {"GEMINI_API_KEY": ""}):
            self.assertEqual(client.embed("hostel"), [])
            self.assertEqual(client.generate("prompt"), "")
        session.post.assert_not_called()


class TestGeminiEmbedder(unittest.TestCase):
    def test_blank_text_is_not_sent(self):
        client = mock.Mock()
        client.config = GeminiConfig()
        embedder = GeminiEmbedder(client)
        self.assertEqual(embedder.embed("  "), [])
        client.embed.assert_not_called()
        self.assertEqual(embedder.model_id, "text-embedding-004")


class TestGeminiMeaningValidator(unittest.TestCase):
    def test_yes_and_no(self):
        client = mock.Mock()
        validator = GeminiMeaningValidator(client)

        client.generate.return_value = "Yes."
        self.assertTrue(validator.validate_same_meaning("mess food", "hostel food"))
        prompt = client.generate.call_args[0][0]
        self.assertIn('User question: "mess food"', prompt)
        self.assertIn('FAQ question: "hostel food"', prompt)

        client.generate.return_value = "no"
        self.assertFalse(validator.validate_same_meaning("canteen", "drinking water"))

        client.generate.return_value = ""
        self.assertFalse(validator.validate_same_meaning("canteen", "drinking water"))

    def test_empty_input_is_rejected_without_call(self):
        client = mock.Mock()
        self.assertFalse(GeminiMeaningValidator(client).validate_same_meaning("", "hostel"))
        client.generate.assert_not_called()


class TestGeminiQueryRewriter(unittest.TestCase):
    def test_single_word_is_only_lowercased(self):
        client = mock.Mock()
        rewritten = GeminiQueryRewriter(client).rewrite(Query(text=" Hostel "))
        self.assertEqual(rewritten.text, "hostel")
        self.assertEqual(rewritten.metadata["original"], "Hostel")
        client.generate.assert_not_called()

    def test_two_words_are_corrected_but_not_rephrased(self):
        client = mock.Mock()
        client.generate.return_value = "wifi available"
        rewritten = GeminiQueryRewriter(client).rewrite(Query(text="wifi availble"))
        self.assertEqual(rewritten.text, "wifi available")
        self.assertEqual(client.generate.call_count, 1)

    def test_long_query_is_corrected_and_normalized(self):
        client = mock.Mock()
        client.generate.side_effect = ["what is the hostel fee", "What is the hostel fee?"]
        rewritten = GeminiQueryRewriter(client).rewrite(Query(text="wat is the hostel fee"))
        self.assertEqual(rewritten.text, "What is the hostel fee?")
        self.assertEqual(client.generate.call_count, 2)

    def test_failed_generation_keeps_input(self):
        client = mock.Mock()
        client.generate.return_value = ""
        rewritten = GeminiQueryRewriter(client).rewrite(Query(text="what is the hostel fee"))
        self.assertEqual(rewritten.text, "what is the hostel fee")

    def test_corrupted_input_is_not_sent(self):
        client = mock.Mock()
        rewritten = GeminiQueryRewriter(client).rewrite(Query(text="Fees for class 10"))
        self.assertEqual(rewritten.text, "fees for class 10")
        client.generate.assert_not_called()
        self.assertTrue(looks_corrupted("supercalifragilistic words"))
        self.assertFalse(looks_corrupted("hostel food"))

    def test_vocabulary_fixes_spelling_without_llm(self):
        client = mock.Mock()
        client.generate.return_value = ""
        vocabulary = Vocabulary(words=("hostel", "students", "canteen", "timings"))
        rewriter = GeminiQueryRewriter(client, vocabulary=lambda: vocabulary)

        self.assertEqual(rewriter.rewrite(Query(text="hostelstudents")).text, "hostel students")
        client.generate.assert_not_called()

        self.assertEqual(rewriter.rewrite(Query(text="canten timings")).text, "canteen timings")
        client.generate.assert_called_once_with("canteen timings", mock.ANY)

    def test_llm_fix_that_drops_words_is_ignored(self):
        client = mock.Mock()
        client.generate.side_effect = ["fees", ""]
        rewriter = GeminiQueryRewriter(client)
        text = "what are the hostle fees for girls"
        self.assertEqual(rewriter.rewrite(Query(text=text)).text, text)


if __name__ == "__main__":
    unittest.main()
