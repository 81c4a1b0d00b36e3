"""Tests for book_printer/assembler.py: document envelope and per-file ordering."""

import io

import pytest

from book_printer.assembler import (
    FOOTER,
    BookAssembler,
    assemble,
    render_document_class,
    render_preamble,
)
from book_printer.models import ConversionOptions
from book_printer.processors.base import ConversionError

from .conftest import RecordingConverter


def run(paths, converter, paper_size="a4", options=None):
    sink = io.StringIO()
    assemble(paths, converter, paper_size, sink, options)
    return sink.getvalue()


# ==================== Template text ====================


class TestTemplates:

    def test_document_class_line(self):
        assert render_document_class("a4") == "\\documentclass[11pt,a4paper,oneside]{report}\n"

    def test_paper_is_only_substitution(self):
        a4 = render_preamble("a4")
        letter = render_preamble("letter")
        assert a4.replace("a4paper", "letterpaper") == letter

    def test_preamble_ends_with_table_of_contents(self):
        assert render_preamble("a4").rstrip().endswith("\\tableofcontents")

    @pytest.mark.parametrize("macro", ["\\tightlist", "\\pandocbounded"])
    def test_pandoc_body_macros_defined(self, macro):
        assert f"\\providecommand{{{macro}}}" in render_preamble("a4")

    def test_pandoc_table_packages_loaded(self):
        preamble = render_preamble("a4")
        assert "\\usepackage{longtable,booktabs,array,calc}" in preamble

    def test_footer_closes_document(self):
        assert FOOTER == "\\end{document}\n"


# ==================== Assembly ====================


class TestBookAssembler:

    def test_zero_files_is_preamble_then_footer(self, recording_converter):
        output = run([], recording_converter)
        assert output == render_preamble("a4") + FOOTER
        assert recording_converter.calls == []

    def test_bodies_follow_argument_order(self, recording_converter):
        output = run(["intro.pod", "subs.pod", "regex.pod"], recording_converter)

        assert output == (
            render_preamble("a4")
            + "%% body: intro.pod\n"
            + "%% body: subs.pod\n"
            + "%% body: regex.pod\n"
            + FOOTER
        )
        assert [call[0] for call in recording_converter.calls] == ["intro.pod", "subs.pod", "regex.pod"]

    def test_envelope_appears_once(self, recording_converter):
        output = run(["a.pod", "b.pod"], recording_converter)
        assert output.count("\\documentclass") == 1
        assert output.count("\\tableofcontents") == 1
        assert output.count("\\end{document}") == 1

    def test_returns_number_converted(self, recording_converter):
        sink = io.StringIO()
        assembler = BookAssembler(recording_converter, "a4")
        assert assembler.assemble(["a.pod", "b.pod"], sink) == 2

    def test_failure_stops_remaining_files(self):
        converter = RecordingConverter(fail_on=["two.pod"])
        sink = io.StringIO()

        with pytest.raises(ConversionError):
            assemble(["one.pod", "two.pod", "three.pod"], converter, "a4", sink)

        assert [call[0] for call in converter.calls] == ["one.pod", "two.pod"]
        output = sink.getvalue()
        assert output.startswith(render_preamble("a4"))
        assert "%% body: one.pod\n" in output
        assert "three.pod" not in output
        assert FOOTER not in output

    def test_unreadable_file_propagates(self, tmp_path):
        converter = RecordingConverter(read_files=True)
        with pytest.raises(FileNotFoundError):
            run([str(tmp_path / "missing.pod")], converter)

    def test_paper_size_in_document_class(self, recording_converter):
        output = run([], recording_converter, paper_size="letter")
        assert output.splitlines()[0] == "\\documentclass[11pt,letterpaper,oneside]{report}"

    def test_default_options_passed_to_converter(self, recording_converter):
        run(["a.pod"], recording_converter)
        options = recording_converter.calls[0][1]
        assert options.accept_targets_as_text == ["sidebar"]
        assert options.codes_in_verbatim is False

    def test_custom_options_passed_to_converter(self, recording_converter):
        options = ConversionOptions(accept_targets_as_text=["note"], codes_in_verbatim=True)
        run(["a.pod", "b.pod"], recording_converter, options=options)
        assert all(call[1] is options for call in recording_converter.calls)

    def test_repeated_runs_are_identical(self):
        first = run(["intro.pod", "subs.pod"], RecordingConverter())
        second = run(["intro.pod", "subs.pod"], RecordingConverter())
        assert first == second

    def test_example_book(self, recording_converter):
        output = run(["intro.pod", "subs.pod"], recording_converter)

        assert output.startswith("\\documentclass[11pt,a4paper,oneside]{report}\n")
        assert output.index("%% body: intro.pod") < output.index("%% body: subs.pod")
        assert output.endswith("\\end{document}\n")
