"""Filesystem tools exercised through the default dispatcher."""

from __future__ import annotations

import base64
from pathlib import Path

import pytest

from conftest import CallTool

pytestmark = pytest.mark.anyio


class TestDirectoryList:
    """Behavioral coverage for directory_list."""

    async def test_lists_visible_entries(
        self, call_tool: CallTool, sample_tree: Path
    ) -> None:
        # Act
        response = await call_tool("directory_list", {"path": str(sample_tree)})

        # Assert
        result = response["result"]
        assert [entry["name"] for entry in result["entries"]] == [
            "data.bin",
            "notes.txt",
            "src",
        ]
        assert result["count"] == 3
        src = result["entries"][2]
        assert src["is_directory"] is True
        assert src["size"] == 0
        assert result["entries"][0]["size"] == 4

    async def test_filters(
        self, call_tool: CallTool, sample_tree: Path
    ) -> None:
        hidden = await call_tool(
            "directory_list", {"path": str(sample_tree), "include_hidden": True}
        )
        dirs = await call_tool(
            "directory_list", {"path": str(sample_tree), "directories_only": True}
        )
        pattern = await call_tool(
            "directory_list", {"path": str(sample_tree), "pattern": "*.txt"}
        )

        assert hidden["result"]["entries"][0]["name"] == ".hidden"
        assert [entry["name"] for entry in dirs["result"]["entries"]] == ["src"]
        assert [e["name"] for e in pattern["result"]["entries"]] == ["notes.txt"]

    async def test_missing_directory_is_io_error(
        self, call_tool: CallTool, tmp_path: Path
    ) -> None:
        response = await call_tool("directory_list", {"path": str(tmp_path / "nope")})

        assert response["error"]["code"] == -32000

    async def test_file_path_is_invalid_params(
        self, call_tool: CallTool, sample_tree: Path
    ) -> None:
        response = await call_tool(
            "directory_list", {"path": str(sample_tree / "notes.txt")}
        )

        assert response["error"]["code"] == -32602

    async def test_unknown_parameter_is_rejected(
        self, call_tool: CallTool, sample_tree: Path
    ) -> None:
        response = await call_tool(
            "directory_list", {"path": str(sample_tree), "colour": "blue"}
        )

        assert response["error"]["code"] == -32602


class TestDirectoryMake:
    """Behavioral coverage for directory_make."""

    async def test_creates_directory(
        self, call_tool: CallTool, tmp_path: Path
    ) -> None:
        target = tmp_path / "made"

        response = await call_tool("directory_make", {"path": str(target)})

        assert response["result"] == {"path": str(target), "created": True}
        assert target.is_dir()

    async def test_existing_directory(
        self, call_tool: CallTool, tmp_path: Path
    ) -> None:
        """Existing directories fail unless exist_ok is set."""
        strict = await call_tool("directory_make", {"path": str(tmp_path)})
        lenient = await call_tool(
            "directory_make", {"path": str(tmp_path), "exist_ok": True}
        )

        assert strict["error"]["code"] == -32602
        assert lenient["result"]["created"] is False

    async def test_parents(
        self, call_tool: CallTool, tmp_path: Path
    ) -> None:
        target = tmp_path / "a" / "b" / "c"

        without = await call_tool("directory_make", {"path": str(target)})
        with_parents = await call_tool(
            "directory_make", {"path": str(target), "parents": True}
        )

        assert without["error"]["code"] == -32602
        assert with_parents["result"]["created"] is True
        assert target.is_dir()


class TestFileRead:
    """Behavioral coverage for file_read."""

    async def test_reads_text(
        self, call_tool: CallTool, sample_tree: Path
    ) -> None:
        path = str(sample_tree / "notes.txt")

        response = await call_tool("file_read", {"path": path})

        assert response["result"] == {
            "content": "alpha\nbeta\ngamma\n",
            "size": 17,
            "mime_type": "text/plain",
            "content_type": "text",
        }

    async def test_line_numbers_and_window(
        self, call_tool: CallTool, sample_tree: Path
    ) -> None:
        # Arrange
        path = str(sample_tree / "notes.txt")

        # Act
        numbered = await call_tool("file_read", {"path": path, "line_numbers": True})
        window = await call_tool("file_read", {"path": path, "offset": 1, "limit": 1})
        past_end = await call_tool("file_read", {"path": path, "offset": 10})

        # Assert
        assert numbered["result"]["content"] == (
            "     1  alpha\n     2  beta\n     3  gamma"
        )
        assert numbered["result"]["line_count"] == 3
        assert window["result"]["content"] == "beta"
        assert past_end["result"]["content"] == ""

    async def test_reads_binary_as_base64(
        self, call_tool: CallTool, sample_tree: Path
    ) -> None:
        response = await call_tool("file_read", {"path": str(sample_tree / "data.bin")})

        result = response["result"]
        assert result["content_type"] == "binary"
        assert result["mime_type"] == "application/octet-stream"
        assert base64.b64decode(result["content"]) == b"\x00\x01\x02\xff"

    async def test_forced_text_on_binary_is_io_error(
        self, call_tool: CallTool, sample_tree: Path
    ) -> None:
        response = await call_tool(
            "file_read",
            {"path": str(sample_tree / "data.bin"), "content_type": "text"},
        )

        assert response["error"]["code"] == -32000

    async def test_missing_file(
        self, call_tool: CallTool, tmp_path: Path
    ) -> None:
        response = await call_tool("file_read", {"path": str(tmp_path / "none.txt")})

        assert response["error"]["code"] == -32602
        assert "File not found" in response["error"]["message"]

    async def test_negative_offset_is_rejected(
        self, call_tool: CallTool, sample_tree: Path
    ) -> None:
        response = await call_tool(
            "file_read", {"path": str(sample_tree / "notes.txt"), "offset": -1}
        )

        assert response["error"]["code"] == -32602


class TestFileWrite:
    """Behavioral coverage for file_write."""

    async def test_writes_text(
        self, call_tool: CallTool, tmp_path: Path
    ) -> None:
        target = tmp_path / "out.txt"
        params = {"path": str(target), "content": "héllo"}

        first = await call_tool("file_write", params)
        second = await call_tool("file_write", {"path": str(target), "content": "bye"})

        assert first["result"] == {
            "path": str(target),
            "size": 6,
            "content_type": "text",
            "created": True,
        }
        assert second["result"]["created"] is False
        assert target.read_text(encoding="utf-8") == "bye"

    async def test_writes_binary(
        self, call_tool: CallTool, tmp_path: Path
    ) -> None:
        target = tmp_path / "out.bin"

        response = await call_tool(
            "file_write",
            {"path": str(target), "content": "aGVsbG8=", "content_type": "binary"},
        )

        assert response["result"]["size"] == 5
        assert target.read_bytes() == b"hello"

    async def test_rejects_invalid_base64(
        self, call_tool: CallTool, tmp_path: Path
    ) -> None:
        response = await call_tool(
            "file_write",
            {"path": str(tmp_path / "x"), "content": "@@@", "content_type": "binary"},
        )

        assert response["error"]["code"] == -32602
        assert not (tmp_path / "x").exists()

    async def test_parent_directories(
        self, call_tool: CallTool, tmp_path: Path
    ) -> None:
        target = tmp_path / "deep" / "er" / "file.txt"

        without = await call_tool("file_write", {"path": str(target), "content": "x"})
        with_dirs = await call_tool(
            "file_write", {"path": str(target), "content": "x", "create_dirs": True}
        )

        assert without["error"]["code"] == -32602
        assert with_dirs["result"]["created"] is True
        assert target.read_text(encoding="utf-8") == "x"


class TestFileMove:
    """Behavioral coverage for file_move."""

    async def test_moves_file(
        self, call_tool: CallTool, sample_tree: Path
    ) -> None:
        source = sample_tree / "notes.txt"
        destination = sample_tree / "renamed.txt"

        response = await call_tool(
            "file_move", {"source": str(source), "destination": str(destination)}
        )

        assert response["result"] == {
            "source": str(source),
            "destination": str(destination),
            "overwritten": False,
        }
        assert not source.exists()
        assert destination.read_text(encoding="utf-8").startswith("alpha")

    async def test_overwrite(
        self, call_tool: CallTool, sample_tree: Path
    ) -> None:
        """An existing destination is only replaced when overwrite is set."""
        # Arrange
        params = {
            "source": str(sample_tree / "notes.txt"),
            "destination": str(sample_tree / "data.bin"),
        }

        # Act
        refused = await call_tool("file_move", params)
        replaced = await call_tool("file_move", {**params, "overwrite": True})

        # Assert
        assert refused["error"]["code"] == -32602
        assert replaced["result"]["overwritten"] is True
        replaced_text = (sample_tree / "data.bin").read_text(encoding="utf-8")
        assert replaced_text.startswith("alpha")

    async def test_missing_source(
        self, call_tool: CallTool, tmp_path: Path
    ) -> None:
        response = await call_tool(
            "file_move",
            {"source": str(tmp_path / "a"), "destination": str(tmp_path / "b")},
        )

        assert response["error"]["code"] == -32602
        assert "Source not found" in response["error"]["message"]

    async def test_creates_destination_parent(
        self, call_tool: CallTool, sample_tree: Path
    ) -> None:
        destination = sample_tree / "archive" / "notes.txt"
        params = {
            "source": str(sample_tree / "notes.txt"),
            "destination": str(destination),
        }

        refused = await call_tool("file_move", params)
        moved = await call_tool("file_move", {**params, "create_dirs": True})

        assert refused["error"]["code"] == -32602
        assert "result" in moved
        assert destination.exists()


class TestFileFind:
    """Behavioral coverage for file_find."""

    async def test_finds_by_name_glob(
        self, call_tool: CallTool, sample_tree: Path
    ) -> None:
        # Act
        response = await call_tool(
            "file_find", {"directory": str(sample_tree), "pattern": "*.py"}
        )

        # Assert
        result = response["result"]
        assert [entry["name"] for entry in result["entries"]] == [
            "main.py",
            "deep.py",
            "util.py",
        ]
        assert result["total"] == 3
        assert result["limited"] is False
        assert result["entries"][0]["size"] > 0

    async def test_depth_and_recursion(
        self, call_tool: CallTool, sample_tree: Path
    ) -> None:
        shallow = await call_tool(
            "file_find",
            {"directory": str(sample_tree), "pattern": "*.py", "recursive": False},
        )
        two_levels = await call_tool(
            "file_find",
            {"directory": str(sample_tree), "pattern": "*.py", "max_depth": 2},
        )

        assert shallow["result"]["entries"] == []
        assert [e["name"] for e in two_levels["result"]["entries"]] == [
            "main.py",
            "util.py",
        ]

    async def test_limit_reports_total(
        self, call_tool: CallTool, sample_tree: Path
    ) -> None:
        response = await call_tool(
            "file_find", {"directory": str(sample_tree), "pattern": "*.py", "limit": 1}
        )

        result = response["result"]
        assert len(result["entries"]) == 1
        assert result["total"] == 3
        assert result["limited"] is True

    async def test_modes_and_kinds(
        self, call_tool: CallTool, sample_tree: Path
    ) -> None:
        directories = await call_tool(
            "file_find",
            {
                "directory": str(sample_tree),
                "pattern": "nested",
                "file_type": "directory",
            },
        )
        by_path = await call_tool(
            "file_find",
            {
                "directory": str(sample_tree),
                "pattern": "nested",
                "mode": "path",
                "file_type": "file",
            },
        )
        ignored = await call_tool(
            "file_find",
            {"directory": str(sample_tree), "pattern": "*.py", "ignore": ["*nested*"]},
        )

        assert [e["is_dir"] for e in directories["result"]["entries"]] == [True]
        assert [e["name"] for e in by_path["result"]["entries"]] == ["deep.py"]
        assert ignored["result"]["total"] == 2

    async def test_missing_directory(
        self, call_tool: CallTool, tmp_path: Path
    ) -> None:
        response = await call_tool(
            "file_find", {"directory": str(tmp_path / "nope"), "pattern": "*"}
        )

        assert response["error"]["code"] == -32602


class TestFileGrep:
    """Behavioral coverage for file_grep."""

    async def test_literal_search(
        self, call_tool: CallTool, sample_tree: Path
    ) -> None:
        # Act
        response = await call_tool(
            "file_grep", {"directory": str(sample_tree), "pattern": "helper"}
        )

        # Assert
        result = response["result"]
        assert [Path(f["path"]).name for f in result["files"]] == ["main.py", "util.py"]
        assert result["files_matched"] == 2
        assert result["total_matches"] == 2
        assert result["files"][1]["matches"] == [
            {"line_number": 1, "line": "def helper():"}
        ]

    async def test_case_insensitive(
        self, call_tool: CallTool, sample_tree: Path
    ) -> None:
        response = await call_tool(
            "file_grep",
            {
                "directory": str(sample_tree),
                "pattern": "helper",
                "case_insensitive": True,
            },
        )

        assert response["result"]["files_matched"] == 3

    async def test_regex(
        self, call_tool: CallTool, sample_tree: Path
    ) -> None:
        response = await call_tool(
            "file_grep",
            {"directory": str(sample_tree), "pattern": r"def \w+\(", "regex": True},
        )

        assert response["result"]["total_matches"] == 2

    async def test_invalid_regex(
        self, call_tool: CallTool, sample_tree: Path
    ) -> None:
        response = await call_tool(
            "file_grep", {"directory": str(sample_tree), "pattern": "(", "regex": True}
        )

        assert response["error"]["code"] == -32602

    async def test_context_lines(
        self, call_tool: CallTool, sample_tree: Path
    ) -> None:
        response = await call_tool(
            "file_grep",
            {
                "directory": str(sample_tree),
                "pattern": "return 42",
                "before_context": 1,
                "after_context": 2,
            },
        )

        match = response["result"]["files"][0]["matches"][0]
        assert match["line_number"] == 2
        assert match["before_context"] == ["1:def helper():"]
        assert "after_context" not in match

    async def test_include_and_file_names_only(
        self, call_tool: CallTool, sample_tree: Path
    ) -> None:
        response = await call_tool(
            "file_grep",
            {
                "directory": str(sample_tree),
                "pattern": "e",
                "include": "*.py",
                "file_names_only": True,
            },
        )

        result = response["result"]
        assert result["files_searched"] == 3
        assert result["files_matched"] == 3
        assert all("matches" not in item for item in result["files"])

    async def test_limit(
        self, call_tool: CallTool, sample_tree: Path
    ) -> None:
        response = await call_tool(
            "file_grep",
            {"directory": str(sample_tree), "pattern": "helper", "limit": 1},
        )

        result = response["result"]
        assert result["files_matched"] == 1
        assert result["limited"] is True

    async def test_limit_counts_only_files_read(
        self, call_tool: CallTool, sample_tree: Path
    ) -> None:
        """Stopping at the limit leaves later files unread and uncounted."""
        # Act
        response = await call_tool(
            "file_grep",
            {"directory": str(sample_tree), "pattern": "helper", "limit": 1},
        )

        # Assert
        result = response["result"]
        # .hidden, notes.txt, main.py and util.py; data.bin is not UTF-8
        assert result["files_searched"] == 4
        assert [Path(f["path"]).name for f in result["files"]] == ["main.py"]

    async def test_limit_not_reached_by_non_matching_files(
        self, call_tool: CallTool, sample_tree: Path
    ) -> None:
        single = await call_tool(
            "file_grep",
            {"directory": str(sample_tree), "pattern": "return 42", "limit": 1},
        )
        exact = await call_tool(
            "file_grep",
            {"directory": str(sample_tree), "pattern": "helper", "limit": 2},
        )

        assert single["result"]["limited"] is False
        assert single["result"]["files_searched"] == 5
        assert exact["result"]["files_matched"] == 2
        assert exact["result"]["limited"] is False
