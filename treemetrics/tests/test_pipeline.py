import json

import pytest

from treemetrics.config import build_metrics, load_config


def make_pipeline(output_dir, **kwargs):
    from treemetrics.pipeline import Pipeline

    kwargs.setdefault("progress", False)
    return Pipeline(build_metrics(load_config()), output_dir=output_dir, **kwargs)


class TestPipeline:
    def test_pipeline_runs_on_directory_files(self, treebank_dir, tmp_path):
        p = make_pipeline(tmp_path / "output")
        results = p.run(sorted(treebank_dir.glob("*.xml")))
        assert len(results) == 2
        assert all(r is not None for r in results)

    def test_output_json_is_created(self, treebank_dir, tmp_path):
        output_dir = tmp_path / "output"
        make_pipeline(output_dir).run([treebank_dir / "a.xml"])
        assert (output_dir / "a.json").exists()

    def test_output_json_has_expected_keys(self, treebank_dir, tmp_path):
        output_dir = tmp_path / "output"
        make_pipeline(output_dir).run([treebank_dir / "a.xml"])
        data = json.loads((output_dir / "a.json").read_text(encoding="utf-8"))
        for key in [
            "source_path",
            "document_id",
            "title",
            "metric_names",
            "sentences",
            "summary",
            "similarity_vector",
        ]:
            assert key in data
        assert data["title"] == "Orationes"
        assert data["sentences"][0]["text"] == "Hello, world "
        assert data["sentences"][1]["profile"]["height"] == 3

    def test_summary_is_mean_over_sentences(self, treebank_dir, tmp_path):
        p = make_pipeline(tmp_path / "output", save=False)
        (result,) = p.run([treebank_dir / "a.xml"])
        assert result["summary"]["Number of nodes"] == pytest.approx(5.0)
        assert result["sentences"][0]["values"]["Height"] == 1

    def test_failed_documents_are_none(self, tmp_path):
        bad = tmp_path / "bad.xml"
        bad.write_text("<treebank>", encoding="utf-8")
        p = make_pipeline(tmp_path / "output")
        results = p.run([bad, tmp_path / "missing.xml"])
        assert results == [None, None]

    def test_no_save_writes_nothing(self, treebank_dir, tmp_path):
        output_dir = tmp_path / "output"
        make_pipeline(output_dir, save=False).run([treebank_dir / "a.xml"])
        assert not output_dir.exists()

    def test_render_flags_are_used(self, treebank_dir, tmp_path):
        from treemetrics.rendering import RenderFlag

        p = make_pipeline(
            tmp_path / "output",
            save=False,
            render_flags=RenderFlag.EXCLUDE_PUNCTUATION,
        )
        (result,) = p.run([treebank_dir / "a.xml"])
        assert result["sentences"][0]["text"] == "Hello world "

    def test_similarity_vectors_populated_in_batch(self, treebank_dir, tmp_path):
        p = make_pipeline(tmp_path / "output", save=False)
        results = p.run(sorted(treebank_dir.glob("*.xml")))
        for result in results:
            assert result["similarity_vector"] is not None
            assert len(result["similarity_vector"]) == len(result["metric_names"])


class TestProfileSimilarity:
    def make_results(self):
        return [
            {"summary": {"a": 1.0, "b": 2.0, "c": 5.0}},
            {"summary": {"a": 2.0, "b": 4.0, "c": 10.0}},
            {"summary": {"a": 9.0, "b": 1.0}},
        ]

    def test_shared_metric_names(self):
        from treemetrics.analyzers.similarity import _shared_metric_names

        assert _shared_metric_names(self.make_results()) == ["a", "b"]

    def test_similarity_matrix_diagonal(self):
        from treemetrics.analyzers import ProfileSimilarityAnalyzer

        matrix = ProfileSimilarityAnalyzer().similarity_matrix(self.make_results())
        assert len(matrix) == 3
        for i in range(3):
            assert matrix[i][i] == pytest.approx(1.0)

    def test_proportional_profiles_are_identical(self):
        from treemetrics.analyzers import ProfileSimilarityAnalyzer

        matrix = ProfileSimilarityAnalyzer().similarity_matrix(self.make_results()[:2])
        assert matrix[0][1] == pytest.approx(1.0)

    def test_compute_batch_sets_vectors(self):
        from treemetrics.analyzers import ProfileSimilarityAnalyzer

        results = self.make_results()
        ProfileSimilarityAnalyzer().compute_batch(results)
        assert all(len(r["similarity_vector"]) == 2 for r in results)

    def test_empty_batch(self):
        from treemetrics.analyzers import ProfileSimilarityAnalyzer

        analyzer = ProfileSimilarityAnalyzer()
        assert analyzer.compute_batch([]) == []
        assert analyzer.similarity_matrix([]) == []


class TestRunDocuments:
    def test_loaded_documents_are_measured_and_saved(self, nested_document, tmp_path):
        output_dir = tmp_path / "output"
        nested_document.source_path = str(tmp_path / "orationes.xml")
        (result,) = make_pipeline(output_dir).run_documents([nested_document])
        assert result["title"] == "Orationes"
        assert result["similarity_vector"] is not None
        assert (output_dir / "orationes.json").exists()
