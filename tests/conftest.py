import shutil
import subprocess
import sys
from pathlib import Path

import pytest

from yelang.yelang_ast import Program
from yelang.yelang_lexer import Token, tokenize
from yelang.yelang_parser import parse

EXAMPLE_A = "ye x = 5;\nbol x;"

EXAMPLE_B = 'ye x = 3\nagar x > 5 { bol "big" } varna { bol "small" }'

# print, arithmetic, conditionals and loops in one program
EXERCISE = """
ye i = 0
ye total = 0
jabtak i < 5 tabtak {
    total = total + i
    i = i + 1
}
bol total
ye q = 7 / 2
bol q
agar total == 10 { bol "ten" } yafir total > 10 { bol "more" } varna bol "less"
ye s = "done"
bol s
"""

EXERCISE_OUTPUT = "10\n3\nten\ndone\n"

# string concatenation with number operands on either side
STRINGS = 'ye n = 2\nye g = "hi " + "there"\nbol g\nye m = "n=" + n\nbol m\nye k = n + "!"\nbol k'

STRINGS_OUTPUT = "hi there\nn=2\n2!\n"


def kinds(tokens: list[Token]) -> list[tuple[str, str]]:
    return [(tok.type, tok.value) for tok in tokens]


def parse_source(source: str, strict: bool = True) -> Program:
    return parse(tokenize(source), strict=strict)


def run_python(code: str) -> str:
    result = subprocess.run(
        [sys.executable, "-c", code], capture_output=True, text=True, timeout=30
    )
    assert result.returncode == 0, result.stderr
    return result.stdout


def run_node(code: str, tmp_path: Path) -> str:
    script = tmp_path / "main.js"
    script.write_text(code, encoding="utf-8")
    result = subprocess.run(
        ["node", str(script)], capture_output=True, text=True, timeout=60
    )
    assert result.returncode == 0, result.stderr
    return result.stdout


def run_compiled(compiler: str, suffix: str, code: str, tmp_path: Path) -> str:
    source = tmp_path / f"main{suffix}"
    binary = tmp_path / "main.bin"
    source.write_text(code, encoding="utf-8")
    build = subprocess.run(
        [compiler, str(source), "-o", str(binary)],
        capture_output=True,
        text=True,
        timeout=120,
    )
    assert build.returncode == 0, build.stderr
    result = subprocess.run([str(binary)], capture_output=True, text=True, timeout=30)
    assert result.returncode == 0, result.stderr
    return result.stdout


def run_command(args: list[str], tmp_path: Path, timeout: int = 120) -> str:
    result = subprocess.run(
        args, capture_output=True, text=True, cwd=tmp_path, timeout=timeout
    )
    assert result.returncode == 0, result.stderr
    return result.stdout


def run_go(code: str, tmp_path: Path) -> str:
    (tmp_path / "main.go").write_text(code, encoding="utf-8")
    return run_command(["go", "run", "main.go"], tmp_path, timeout=180)


def run_java(code: str, tmp_path: Path) -> str:
    (tmp_path / "Main.java").write_text(code, encoding="utf-8")
    run_command(["javac", "Main.java"], tmp_path)
    return run_command(["java", "-cp", str(tmp_path), "Main"], tmp_path)


def run_kotlin(code: str, tmp_path: Path) -> str:
    (tmp_path / "main.kt").write_text(code, encoding="utf-8")
    run_command(
        ["kotlinc", "main.kt", "-include-runtime", "-d", "main.jar"], tmp_path, timeout=300
    )
    return run_command(["java", "-jar", "main.jar"], tmp_path)


def has_tool(name: str) -> bool:
    return shutil.which(name) is not None


@pytest.fixture  # type: ignore[misc]
def source_file(tmp_path: Path) -> Path:
    path = tmp_path / "hello.ye"
    path.write_text(EXAMPLE_A, encoding="utf-8")
    return path
