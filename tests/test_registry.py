"""Tests for the format registry and detector."""

import pytest

from src.formats import (
    FormatDetector,
    FormatHandler,
    FormatRegistry,
    UnsupportedFormatError,
    format_file_size,
    get_format_registry,
)
from src.formats.text_format import TextFormat


class TestFormatDetector:
    """Test format family and MIME detection."""

    def test_extension(self) -> None:
        """Test extension extraction from names, paths and URLs."""
        assert FormatDetector.extension("Report.Final.JSON") == "json"
        assert FormatDetector.extension("/data/rows.csv") == "csv"
        assert FormatDetector.extension("file:///tmp/config.yml") == "yml"
        assert FormatDetector.extension("README") == ""

    def test_family(self) -> None:
        """Test family lookup."""
        assert FormatDetector.family("png") == "image"
        assert FormatDetector.family(".YAML") == "text"
        assert FormatDetector.family("ogg") == "audio"
        assert FormatDetector.family("exe") is None

    def test_mime_types(self) -> None:
        """Test the format table and its default."""
        assert FormatDetector.mime_type("json") == "application/json"
        assert FormatDetector.mime_type("yml") == "text/yaml"
        assert FormatDetector.mime_type("mp3") == "audio/mpeg"
        assert FormatDetector.mime_type("xyz") == "text/plain"

    def test_target_options(self) -> None:
        """Test targets are the same family minus the source format."""
        assert FormatDetector.target_options("song.wav") == ["mp3", "ogg"]
        assert FormatDetector.target_options("data.csv") == [
            "txt", "json", "html", "md", "xml", "yaml", "yml",
        ]
        assert FormatDetector.target_options("archive.zip") == []

    def test_format_file_size(self) -> None:
        """Test human-readable sizes."""
        assert format_file_size(0) == "0 Bytes"
        assert format_file_size(500) == "500 Bytes"
        assert format_file_size(1024) == "1 KB"
        assert format_file_size(1536) == "1.5 KB"
        assert format_file_size(5 * 1024 * 1024) == "5 MB"


class TestFormatRegistry:
    """Test format registry."""

    def test_registry_initialization(self) -> None:
        """Test that registry initializes with default formats."""
        formats = get_format_registry().list_formats()

        for name in ["text", "json", "csv", "xml", "yaml", "markdown", "html"]:
            assert name in formats

    def test_supported_extensions(self) -> None:
        """Test all text extensions are registered."""
        extensions = get_format_registry().get_supported_extensions()

        for ext in FormatDetector.FAMILIES["text"]:
            assert ext in extensions

    def test_get_parser_by_extension(self) -> None:
        """Test parser lookup for formats with their own parser."""
        registry = get_format_registry()

        assert registry.get_parser("csv").name == "CSV"
        assert registry.get_parser(".YML").name == "YAML"

    def test_get_parser_falls_back_to_text(self) -> None:
        """Test presentation and unknown formats are read as plain text."""
        registry = get_format_registry()

        assert registry.get_parser("html").name == "Text"
        assert registry.get_parser("md").name == "Text"
        assert registry.get_parser("xyz").name == "Text"

    def test_get_serializer(self) -> None:
        """Test serializer lookup."""
        registry = get_format_registry()

        assert registry.get_serializer("md").name == "Markdown"
        assert registry.has_serializer("yaml")
        assert not registry.has_serializer("pdf")

    def test_unknown_serializer_raises(self) -> None:
        """Test unsupported targets raise UnsupportedFormatError."""
        with pytest.raises(UnsupportedFormatError) as exc_info:
            get_format_registry().get_serializer("pdf")

        assert "pdf" in str(exc_info.value)

    def test_capabilities(self) -> None:
        """Test handlers report which operations they implement."""
        registry = get_format_registry()

        assert registry.get_handler("json").can_parse
        assert registry.get_handler("json").can_serialize
        assert not registry.get_handler("html").can_parse
        assert registry.get_handler("html").can_serialize

    def test_empty_registry_has_no_fallback(self) -> None:
        """Test a registry without a text handler cannot parse anything."""
        with pytest.raises(UnsupportedFormatError):
            FormatRegistry().get_parser("txt")

    def test_unavailable_handler_is_skipped(self) -> None:
        """Test handlers with missing dependencies are not registered."""

        class MissingDependencyFormat(FormatHandler):
            @property
            def supported_extensions(self) -> list[str]:
                return ["toml"]

            @property
            def requires_dependencies(self) -> list[str]:
                return ["package_that_does_not_exist_42"]

        registry = FormatRegistry()
        registry.register("toml", MissingDependencyFormat())
        registry.register("text", TextFormat())

        assert registry.list_formats() == ["text"]
        assert registry.get_handler("toml") is None
