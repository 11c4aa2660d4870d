"""Tests for tree construction, aggregation and the rendered report."""

import pytest
from tokenum.core.errors import ReadDirError
from tokenum.core.models import Classification, ClassificationKind, MaxSize
from tokenum.utils.path_utils import PathUtils
from tokenum.utils.size import parse_max_size
from tokenum.utils.tree_builder import FileTreeBuilder, build, build_tree

TEN_MB = MaxSize(limit=10 * 1024 * 1024, label="10Mb")


def valid(size, tokens):
    return Classification(ClassificationKind.VALID, size=size, token_count=tokens)


def other(kind, size):
    return Classification(kind, size=size)


def find(node, *labels):
    for label in labels:
        node = node.child(label)
        assert node is not None, label
    return node


class TestPathUtils:
    def test_relative_components(self, temp_workspace):
        path = temp_workspace / "src" / "utils" / "helper.py"
        assert PathUtils.relative_components(path, temp_workspace) == ["src", "utils", "helper.py"]

    def test_relative_components_of_root(self, temp_workspace):
        assert PathUtils.relative_components(temp_workspace, temp_workspace) == []

    def test_root_label(self, temp_workspace):
        assert PathUtils.root_label(temp_workspace / "project") == "project"

    def test_root_label_filesystem_root(self):
        root = PathUtils.canonicalize("/")
        assert PathUtils.root_label(root) == str(root)

    def test_canonicalize_missing(self, temp_workspace):
        with pytest.raises(OSError):
            PathUtils.canonicalize(temp_workspace / "missing")

    def test_join_path_components(self):
        assert PathUtils.join_path_components(["src", "main.py"]) == "src/main.py"


class TestFileTreeBuilder:
    @pytest.fixture
    def builder(self, tokenizer):
        return FileTreeBuilder("repo", tokenizer, TEN_MB)

    def test_ensure_directory_creates_chain_once(self, builder):
        first = builder.ensure_directory(["src", "utils"])
        second = builder.ensure_directory(["src", "utils"])

        assert first is second
        assert [c.label for c in builder.root.children] == ["src"]
        assert first.parent is builder.root.child("src")

    def test_ensure_directory_empty_is_root(self, builder):
        assert builder.ensure_directory([]) is builder.root

    def test_valid_file_aggregates_size_and_tokens(self, builder):
        node = builder.add_file(["src", "main.py"], valid(100, 40))

        assert node.annotation == "100 bytes, 40 tokens"
        assert find(builder.root, "src").aggregate.total_size == 100
        assert find(builder.root, "src").aggregate.total_tokens == 40
        assert builder.root.aggregate.total_size == 100
        assert builder.root.aggregate.total_tokens == 40

    @pytest.mark.parametrize("kind", [
        ClassificationKind.BINARY,
        ClassificationKind.INVALID_ENCODING,
        ClassificationKind.OVERSIZED,
    ])
    def test_non_valid_aggregates_size_only(self, builder, kind):
        node = builder.add_file(["a", "b", "file"], other(kind, 5000))

        assert node is not None
        for directory in (builder.root, find(builder.root, "a"), find(builder.root, "a", "b")):
            assert directory.aggregate.total_size == 5000
            assert directory.aggregate.total_tokens == 0

    def test_empty_file_is_shown_but_not_aggregated(self, builder):
        node = builder.add_file(["docs", "empty.md"], other(ClassificationKind.EMPTY, 0))

        assert node.annotation == "0 bytes, 0 token"
        assert builder.root.aggregate.total_size == 0
        assert find(builder.root, "docs").aggregate.total_size == 0

    def test_token_range_filter(self, tokenizer):
        builder = FileTreeBuilder("repo", tokenizer, TEN_MB, min_token=5, max_token=10)

        assert builder.add_file(["low.txt"], valid(10, 4)) is None
        assert builder.add_file(["high.txt"], valid(10, 11)) is None
        kept = builder.add_file(["mid.txt"], valid(10, 7))

        assert kept is not None
        assert [c.label for c in builder.root.children] == ["mid.txt"]
        assert builder.root.aggregate.total_tokens == 7
        assert builder.root.aggregate.total_size == 10

    def test_token_range_bounds_inclusive(self, tokenizer):
        builder = FileTreeBuilder("repo", tokenizer, TEN_MB, min_token=5, max_token=10)
        assert builder.add_file(["five"], valid(1, 5)) is not None
        assert builder.add_file(["ten"], valid(1, 10)) is not None

    def test_filtered_file_keeps_its_directory(self, tokenizer):
        builder = FileTreeBuilder("repo", tokenizer, TEN_MB, min_token=100)
        builder.add_file(["src", "tiny.py"], valid(10, 1))

        src = find(builder.root, "src")
        assert src.children == []
        assert src.aggregate.total_size == 0

    def test_only_valid_hides_but_still_aggregates(self, tokenizer):
        builder = FileTreeBuilder("repo", tokenizer, TEN_MB, only_valid=True)

        assert builder.add_file(["bin", "x.bin"], other(ClassificationKind.BINARY, 300)) is None
        assert builder.add_file(["bin", "y.txt"], other(ClassificationKind.INVALID_ENCODING, 20)) is None
        assert builder.add_file(["bin", "z.iso"], other(ClassificationKind.OVERSIZED, 1000)) is None
        assert builder.add_file(["bin", "e.md"], other(ClassificationKind.EMPTY, 0)) is None
        assert builder.add_file(["bin", "ok.txt"], valid(30, 3)) is not None

        bin_dir = find(builder.root, "bin")
        assert [c.label for c in bin_dir.children] == ["ok.txt"]
        assert bin_dir.aggregate.total_size == 1350
        assert bin_dir.aggregate.total_tokens == 3

    def test_finalize_annotations(self, builder):
        builder.ensure_directory(["empty"])
        builder.add_file(["src", "main.py"], valid(2048, 12))
        builder.finalize()

        assert builder.root.annotation == "2.00Kb, total 12 tokens"
        assert find(builder.root, "src").annotation == "2.00Kb, total 12 tokens"
        assert find(builder.root, "empty").annotation == "0 bytes, total 0 token"

    def test_aggregate_invariant(self, builder):
        builder.add_file(["a", "one"], valid(10, 1))
        builder.add_file(["a", "b", "two"], valid(20, 2))
        builder.add_file(["a", "b", "bin"], other(ClassificationKind.BINARY, 40))
        builder.add_file(["c", "three"], valid(30, 3))
        builder.add_file(["c", "empty"], other(ClassificationKind.EMPTY, 0))
        builder.finalize()

        contributions = {
            "one": (10, 1), "two": (20, 2), "bin": (40, 0), "three": (30, 3), "empty": (0, 0),
        }
        for node in builder.root.walk():
            if not node.is_directory():
                continue
            files = [n for n in node.walk() if n.is_file()]
            assert node.aggregate.total_size == sum(contributions[f.label][0] for f in files)
            assert node.aggregate.total_tokens == sum(contributions[f.label][1] for f in files)

    def test_add_file_path_counts_tokens(self, builder, temp_workspace):
        path = temp_workspace / "hello.txt"
        path.write_text("one two three")

        node = builder.add_file_path(["hello.txt"], path)

        assert node.annotation == "13 bytes, 3 tokens"
        assert builder.root.aggregate.total_tokens == 3


class TestBuild:
    def test_end_to_end(self, sample_repo, tokenizer):
        report = build(sample_repo, tokenizer, TEN_MB)

        assert report == "\n".join([
            "project (183 bytes, total 25 tokens)",
            "├── a.txt (69 bytes, 20 tokens)",
            "└── sub (114 bytes, total 5 tokens)",
            "    ├── b.bin (100 bytes, binary file)",
            "    └── c.txt (14 bytes, 5 tokens)",
        ])

    def test_mixed_repo(self, mixed_repo, tokenizer):
        report = build(mixed_repo, tokenizer, parse_max_size("2k"))

        assert report == "\n".join([
            "mixed (2.99Kb, total 19 tokens)",
            "├── docs (28 bytes, total 7 tokens)",
            "│   ├── empty.md (0 bytes, 0 token)",
            "│   ├── guide.md (20 bytes, 7 tokens)",
            "│   └── latin1.txt (8 bytes, contain invalid UTF-8)",
            "└── src (2.97Kb, total 12 tokens)",
            "    ├── big.txt (2.93Kb, file size 3000 bytes > 2Kb)",
            "    └── main.py (37 bytes, 12 tokens)",
        ])

    def test_mixed_repo_only_valid(self, mixed_repo, tokenizer):
        report = build(mixed_repo, tokenizer, parse_max_size("2k"), only_valid=True)

        assert report == "\n".join([
            "mixed (2.99Kb, total 19 tokens)",
            "├── docs (28 bytes, total 7 tokens)",
            "│   └── guide.md (20 bytes, 7 tokens)",
            "└── src (2.97Kb, total 12 tokens)",
            "    └── main.py (37 bytes, 12 tokens)",
        ])

    def test_mixed_repo_token_range(self, mixed_repo, tokenizer):
        report = build(mixed_repo, tokenizer, parse_max_size("2k"), min_token=8, max_token=15)

        assert report == "\n".join([
            "mixed (2.97Kb, total 12 tokens)",
            "├── docs (8 bytes, total 0 token)",
            "│   ├── empty.md (0 bytes, 0 token)",
            "│   └── latin1.txt (8 bytes, contain invalid UTF-8)",
            "└── src (2.97Kb, total 12 tokens)",
            "    ├── big.txt (2.93Kb, file size 3000 bytes > 2Kb)",
            "    └── main.py (37 bytes, 12 tokens)",
        ])

    def test_oversized_contributes_size_and_no_tokens(self, temp_workspace, tokenizer):
        root = temp_workspace / "repo"
        (root / "deep" / "er").mkdir(parents=True)
        (root / "deep" / "er" / "big.txt").write_text(" ".join(["word"] * 100))

        tree = build_tree(root, tokenizer, MaxSize(limit=10, label="10 bytes"))

        for directory in (tree, tree.child("deep"), tree.child("deep").child("er")):
            assert directory.aggregate.total_size == 499
            assert directory.aggregate.total_tokens == 0

    def test_unlimited_size_never_oversized(self, temp_workspace, tokenizer):
        root = temp_workspace / "repo"
        root.mkdir()
        (root / "big.txt").write_text("x " * 5001)

        tree = build_tree(root, tokenizer, parse_max_size("0k"))
        assert tree.child("big.txt").annotation == "9.77Kb, 5001 tokens"

    def test_empty_root(self, temp_workspace, tokenizer):
        root = temp_workspace / "nothing"
        root.mkdir()
        assert build(root, tokenizer, TEN_MB) == "nothing (0 bytes, total 0 token)"

    def test_empty_subdirectory_still_rendered(self, sample_repo, tokenizer):
        (sample_repo / "zz_empty").mkdir()
        report = build(sample_repo, tokenizer, TEN_MB)
        assert report.splitlines()[-1] == "└── zz_empty (0 bytes, total 0 token)"

    def test_root_is_canonicalized(self, sample_repo, tokenizer):
        tree = build_tree(sample_repo / "sub" / "..", tokenizer, TEN_MB)
        assert tree.label == "project"

    def test_missing_root(self, temp_workspace, tokenizer):
        with pytest.raises(ReadDirError):
            build(temp_workspace / "missing", tokenizer, TEN_MB)

    def test_render_twice_is_identical(self, sample_repo, tokenizer):
        tree = build_tree(sample_repo, tokenizer, TEN_MB)
        assert tree.render() == tree.render()

    def test_progress_bar(self, sample_repo, tokenizer, capsys):
        report = build(sample_repo, tokenizer, TEN_MB, progress=True)
        captured = capsys.readouterr()
        assert captured.out == ""
        assert report.startswith("project (183 bytes, total 25 tokens)")
