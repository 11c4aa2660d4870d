import pytest
import tempfile
import shutil
from pathlib import Path


class WordTokenizer:
    """Stand-in tokenizer: one token per whitespace separated word."""

    encoding_name = "words"

    def count(self, text: str) -> int:
        return len(text.split())


def words(n: int) -> str:
    return " ".join(f"w{i}" for i in range(n))


@pytest.fixture
def tokenizer():
    return WordTokenizer()


@pytest.fixture
def temp_workspace():
    """Create a temporary directory for test files."""
    temp_dir = tempfile.mkdtemp()
    yield Path(temp_dir)
    shutil.rmtree(temp_dir)


@pytest.fixture
def sample_repo(temp_workspace):
    """
    Small project with one file of every classification.

    project/
        a.txt          20 tokens
        sub/b.bin      binary, 100 bytes
        sub/c.txt      5 tokens
    """
    repo_root = temp_workspace / "project"
    repo_root.mkdir()
    (repo_root / "sub").mkdir()

    (repo_root / "a.txt").write_text(words(20))
    (repo_root / "sub" / "b.bin").write_bytes(b'\x00\x01\x02' + b'\xff' * 97)
    (repo_root / "sub" / "c.txt").write_text(words(5))

    return repo_root


@pytest.fixture
def mixed_repo(temp_workspace):
    """
    Project covering every classification and the ignore rules.

    mixed/
        .gitignore     ignores *.log and build/
        .hidden        skipped
        build/out.txt  ignored
        debug.log      ignored
        docs/
            empty.md       empty
            latin1.txt     invalid UTF-8
            guide.md       7 tokens
        src/
            big.txt        3000 bytes
            main.py        12 tokens
    """
    repo_root = temp_workspace / "mixed"
    repo_root.mkdir()
    for d in ("build", "docs", "src"):
        (repo_root / d).mkdir()

    (repo_root / ".gitignore").write_text("*.log\nbuild/\n")
    (repo_root / ".hidden").write_text(words(3))
    (repo_root / "build" / "out.txt").write_text(words(4))
    (repo_root / "debug.log").write_text(words(9))
    (repo_root / "docs" / "empty.md").write_text("")
    (repo_root / "docs" / "latin1.txt").write_bytes("café olé".encode("latin-1"))
    (repo_root / "docs" / "guide.md").write_text(words(7))
    (repo_root / "src" / "big.txt").write_text("x" * 3000)
    (repo_root / "src" / "main.py").write_text(words(12))

    return repo_root
