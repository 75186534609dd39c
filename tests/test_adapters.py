import unittest
from types import SimpleNamespace
from unittest import mock

import requests

from domain.errors import EmbeddingError, VectorStoreError
from infrastructure.embedding.ollama_embedder import OllamaEmbedder, OllamaEmbedderConfig
from infrastructure.storage.qdrant_vector_search import QdrantConfig, QdrantConnector, QdrantVectorSearch


def fake_response(payload=None, *, status_error: Exception | None = None, json_error: Exception | None = None):
    response = mock.Mock()
    if status_error is not None:
        response.raise_for_status.side_effect = status_error
    if json_error is not None:
        response.json.side_effect = json_error
    else:
        response.json.return_value = payload
    return response


class TestOllamaEmbedder(unittest.TestCase):
    def setUp(self) -> None:
        self.embedder = OllamaEmbedder(OllamaEmbedderConfig(base_url="http://ollama:11434/", timeout=5.0))

    @mock.patch("infrastructure.embedding.ollama_embedder.requests.post")
    def test_returns_embedding(self, post: mock.Mock) -> None:
        post.return_value = fake_response({"embedding": [0.5, 1, -0.25]})

        vector = self.embedder.embed("nomic-embed-text", "reset password")

        self.assertEqual(vector, [0.5, 1.0, -0.25])
        post.assert_called_once_with(
            "http://ollama:11434/api/embeddings",
            json={"model": "nomic-embed-text", "prompt": "reset password"},
            timeout=5.0,
        )

    @mock.patch("infrastructure.embedding.ollama_embedder.requests.post")
    def test_transport_error_becomes_embedding_error(self, post: mock.Mock) -> None:
        post.side_effect = requests.ConnectionError("connection refused")

        with self.assertRaises(EmbeddingError) as ctx:
            self.embedder.embed("nomic-embed-text", "reset password")

        self.assertEqual(str(ctx.exception), "ollama connection refused")

    @mock.patch("infrastructure.embedding.ollama_embedder.requests.post")
    def test_http_error_becomes_embedding_error(self, post: mock.Mock) -> None:
        post.return_value = fake_response(status_error=requests.HTTPError("404 model not found"))

        with self.assertRaises(EmbeddingError):
            self.embedder.embed("missing-model", "reset password")

    @mock.patch("infrastructure.embedding.ollama_embedder.requests.post")
    def test_missing_embedding_is_an_error(self, post: mock.Mock) -> None:
        post.return_value = fake_response({"error": "model is not an embedding model"})

        with self.assertRaises(EmbeddingError):
            self.embedder.embed("llama3", "reset password")

    @mock.patch("infrastructure.embedding.ollama_embedder.requests.post")
    def test_invalid_json_is_an_error(self, post: mock.Mock) -> None:
        post.return_value = fake_response(json_error=ValueError("Expecting value"))

        with self.assertRaises(EmbeddingError):
            self.embedder.embed("nomic-embed-text", "reset password")


class TestQdrantVectorSearch(unittest.TestCase):
    def test_returns_best_point(self) -> None:
        client = mock.Mock()
        client.query_points.return_value = SimpleNamespace(
            points=[SimpleNamespace(score=0.92, payload={"id": "/srv/docs/reset.md"})]
        )

        match = QdrantVectorSearch(client).search("docs", [0.1, 0.2])

        self.assertEqual(match.score, 0.92)
        self.assertEqual(match.document_path, "/srv/docs/reset.md")
        client.query_points.assert_called_once_with(
            collection_name="docs", query=[0.1, 0.2], limit=1, with_payload=True
        )

    def test_no_points_is_empty_match(self) -> None:
        client = mock.Mock()
        client.query_points.return_value = SimpleNamespace(points=[])

        match = QdrantVectorSearch(client).search("docs", [0.1])

        self.assertTrue(match.is_empty)

    def test_point_without_payload_is_empty_match(self) -> None:
        client = mock.Mock()
        client.query_points.return_value = SimpleNamespace(points=[SimpleNamespace(score=0.4, payload=None)])

        match = QdrantVectorSearch(client).search("docs", [0.1])

        self.assertTrue(match.is_empty)

    def test_search_error_becomes_vector_store_error(self) -> None:
        client = mock.Mock()
        client.query_points.side_effect = RuntimeError("Collection docs not found")

        with self.assertRaises(VectorStoreError) as ctx:
            QdrantVectorSearch(client).search("docs", [0.1])

        self.assertEqual(str(ctx.exception), "qdrant Collection docs not found")

    def test_close_closes_client(self) -> None:
        client = mock.Mock()

        QdrantVectorSearch(client).close()

        client.close.assert_called_once_with()


class TestQdrantConnector(unittest.TestCase):
    @mock.patch("infrastructure.storage.qdrant_vector_search.QdrantClient")
    def test_builds_client_from_config(self, client_cls: mock.Mock) -> None:
        connector = QdrantConnector(QdrantConfig(url="http://qdrant", port=6334, timeout=3.0))

        connection = connector.connect()

        self.assertIsInstance(connection, QdrantVectorSearch)
        client_cls.assert_called_once_with(url="http://qdrant", port=6334, timeout=3.0)

    @mock.patch("infrastructure.storage.qdrant_vector_search.QdrantClient")
    def test_construction_failure_becomes_vector_store_error(self, client_cls: mock.Mock) -> None:
        client_cls.side_effect = ValueError("Invalid URL")

        with self.assertRaises(VectorStoreError) as ctx:
            QdrantConnector(QdrantConfig()).connect()

        self.assertEqual(str(ctx.exception), "qdrant Invalid URL")


if __name__ == "__main__":
    unittest.main()
