"""
Tests for the file persister and the concurrent fan-out writer.
"""

from __future__ import annotations

import os
import stat

import pytest
from conftest import artifacts

from graphql_generate.pipeline import (
    AggregateWriteError,
    ArtifactGroup,
    ArtifactWriteError,
    AtomicWriter,
    FanOutWriter,
    NamedArtifact,
)


class TestAtomicWriter:
    @pytest.mark.parametrize("atomic", [True, False])
    def test_creates_missing_parents(self, tmp_path, atomic):
        target = tmp_path / "a" / "b" / "c" / "file.py"

        AtomicWriter(atomic=atomic).write(target, "content")

        assert target.read_text(encoding="utf-8") == "content"

    def test_existing_directory_is_not_an_error(self, tmp_path):
        writer = AtomicWriter()
        writer.write(tmp_path / "d" / "one.py", "1")
        writer.write(tmp_path / "d" / "two.py", "2")

        assert sorted(p.name for p in (tmp_path / "d").iterdir()) == ["one.py", "two.py"]

    def test_overwrites_existing_file(self, tmp_path):
        target = tmp_path / "file.py"
        target.write_text("old old old")

        AtomicWriter().write(target, "new")

        assert target.read_text() == "new"

    def test_no_temporary_files_left(self, tmp_path):
        AtomicWriter().write(tmp_path / "file.py", "content")

        assert [p.name for p in tmp_path.iterdir()] == ["file.py"]

    def test_directory_failure_is_tagged_with_path(self, tmp_path):
        (tmp_path / "blocked").write_text("a file, not a directory")
        target = tmp_path / "blocked" / "file.py"

        with pytest.raises(ArtifactWriteError) as exc_info:
            AtomicWriter().write(target, "content")

        assert exc_info.value.path == target
        assert isinstance(exc_info.value.cause, OSError)

    def test_target_is_a_directory(self, tmp_path):
        (tmp_path / "file.py").mkdir()

        with pytest.raises(ArtifactWriteError):
            AtomicWriter().write(tmp_path / "file.py", "content")

        assert [p.name for p in tmp_path.iterdir()] == ["file.py"]

    def test_unicode_content(self, tmp_path):
        AtomicWriter().write(tmp_path / "doc.graphql", "# naïve ✓\n")

        assert (tmp_path / "doc.graphql").read_text(encoding="utf-8") == "# naïve ✓\n"

    def test_unencodable_content_is_a_write_error(self, tmp_path):
        target = tmp_path / "doc.graphql"

        with pytest.raises(ArtifactWriteError) as exc_info:
            AtomicWriter().write(target, "\ud800")

        assert isinstance(exc_info.value.cause, UnicodeEncodeError)
        assert list(tmp_path.iterdir()) == []

    def test_non_text_content_is_a_write_error(self, tmp_path):
        with pytest.raises(ArtifactWriteError) as exc_info:
            AtomicWriter().write(tmp_path / "file.py", None)

        assert isinstance(exc_info.value.cause, TypeError)

    def test_atomic_and_direct_writes_share_file_mode(self, tmp_path):
        AtomicWriter(atomic=True).write(tmp_path / "atomic.py", "content")
        AtomicWriter(atomic=False).write(tmp_path / "direct.py", "content")

        atomic_mode = stat.S_IMODE(os.stat(tmp_path / "atomic.py").st_mode)
        direct_mode = stat.S_IMODE(os.stat(tmp_path / "direct.py").st_mode)
        assert atomic_mode == direct_mode

    def test_overwrite_keeps_existing_mode(self, tmp_path):
        target = tmp_path / "script.py"
        target.write_text("old")
        target.chmod(0o750)

        AtomicWriter().write(target, "new")

        assert stat.S_IMODE(os.stat(target).st_mode) == 0o750


class TestFanOutWriter:
    def test_writes_one_file_per_artifact(self, tmp_path):
        group = ArtifactGroup.of("queries", tmp_path / "queries", "graphql", artifacts(a="A", b="B", c="C"))

        written = FanOutWriter().write_all(group)

        assert written == [tmp_path / "queries" / f"{name}.graphql" for name in "abc"]
        assert [(tmp_path / "queries" / f"{name}.graphql").read_text() for name in "abc"] == ["A", "B", "C"]

    def test_rewriting_is_idempotent(self, tmp_path):
        group = ArtifactGroup.of("queries", tmp_path / "q", "graphql", artifacts(a="A\n", b="B\n"))
        writer = FanOutWriter()

        writer.write_all(group)
        first = {p.name: p.read_bytes() for p in (tmp_path / "q").iterdir()}
        writer.write_all(group)
        second = {p.name: p.read_bytes() for p in (tmp_path / "q").iterdir()}

        assert first == second

    def test_empty_group_creates_nothing(self, tmp_path):
        group = ArtifactGroup.of("queries", tmp_path / "queries", "graphql", ())

        assert FanOutWriter().write_all(group) == []
        assert not (tmp_path / "queries").exists()

    def test_failure_does_not_stop_siblings(self, tmp_path):
        out = tmp_path / "out"
        out.mkdir()
        (out / "blocked").write_text("a file, not a directory")
        group = ArtifactGroup(
            "resolvers",
            out,
            "py",
            (NamedArtifact("blocked/a", "A"), NamedArtifact("b", "B"), NamedArtifact("c", "C")),
        )

        with pytest.raises(AggregateWriteError) as exc_info:
            FanOutWriter().write_all(group)

        assert (out / "b.py").read_text() == "B"
        assert (out / "c.py").read_text() == "C"
        [error] = exc_info.value.errors
        assert error.artifact == "blocked/a"
        assert error.category == "resolvers"
        assert error.path == out / "blocked" / "a.py"

    def test_every_failure_is_reported(self, tmp_path):
        (tmp_path / "x").write_text("file")
        (tmp_path / "y").write_text("file")
        groups = [
            ArtifactGroup.of("first", tmp_path / "x", "py", artifacts(a="A")),
            ArtifactGroup.of("second", tmp_path / "y", "py", artifacts(b="B")),
            ArtifactGroup.of("third", tmp_path / "z", "py", artifacts(c="C")),
        ]

        with pytest.raises(AggregateWriteError) as exc_info:
            FanOutWriter(max_workers=1).write_groups(groups)

        assert [(e.category, e.artifact) for e in exc_info.value.errors] == [("first", "a"), ("second", "b")]
        assert (tmp_path / "z" / "c.py").read_text() == "C"

    def test_duplicate_names_last_write_wins(self, tmp_path):
        group = ArtifactGroup("types", tmp_path, "py", (NamedArtifact("dup", "first"), NamedArtifact("dup", "second")))

        FanOutWriter().write_all(group)

        # No dedup: whichever write lands last is kept
        assert (tmp_path / "dup.py").read_text() in ("first", "second")

    def test_bounded_pool_writes_everything(self, tmp_path):
        many = tuple(NamedArtifact(f"file{i}", str(i)) for i in range(50))
        group = ArtifactGroup("many", tmp_path, "txt", many)

        written = FanOutWriter(max_workers=2).write_all(group)

        assert len(written) == 50
        assert (tmp_path / "file42.txt").read_text() == "42"

    def test_encoding_failure_does_not_hide_other_failures(self, tmp_path):
        (tmp_path / "blocked").write_text("a file, not a directory")
        groups = [
            ArtifactGroup.of("fragments", tmp_path / "fragments", "graphql", artifacts(bad="\ud800", good="G")),
            ArtifactGroup.of("queries", tmp_path / "blocked", "graphql", artifacts(q="Q")),
        ]

        with pytest.raises(AggregateWriteError) as exc_info:
            FanOutWriter().write_groups(groups)

        errors = exc_info.value.errors
        assert [(e.category, e.artifact) for e in errors] == [("fragments", "bad"), ("queries", "q")]
        assert isinstance(errors[0].cause, UnicodeEncodeError)
        assert (tmp_path / "fragments" / "good.graphql").read_text() == "G"

    def test_unexpected_writer_failure_is_aggregated(self, tmp_path):
        class ExplodingWriter(AtomicWriter):
            def write(self, path, content):
                if content == "boom":
                    raise RuntimeError("writer exploded")
                return super().write(path, content)

        group = ArtifactGroup.of("types", tmp_path, "py", artifacts(a="boom", b="B"))

        with pytest.raises(AggregateWriteError) as exc_info:
            FanOutWriter(ExplodingWriter()).write_all(group)

        [error] = exc_info.value.errors
        assert (error.artifact, error.path) == ("a", tmp_path / "a.py")
        assert isinstance(error.__cause__, RuntimeError)
        assert (tmp_path / "b.py").read_text() == "B"
