"""
Test cases for PDF combiner utility functions.
"""

import logging
import os
import shutil
import tempfile
import unittest
from pathlib import Path

from pypdf import PdfWriter

from pdf_combiner.exceptions import InvalidPDFError, InvalidRangeError, UnsupportedFormatError
from pdf_combiner.types import DocumentInfo, PageRange
from pdf_combiner.utils import (
    LOG_FORMAT,
    build_combine_plan,
    check_format,
    default_output_path,
    format_file_size,
    get_document_info,
    get_logger,
    read_file_list,
    split_argument,
)


class TestSplitArgument(unittest.TestCase):
    """Test cases for splitting command-line sources."""

    def test_plain_path(self):
        argument = split_argument("docs/report.pdf")
        self.assertEqual(argument.path, "docs/report.pdf")
        self.assertEqual(argument.extension, ".pdf")
        self.assertEqual(argument.ranges, [])
        self.assertFalse(argument.is_output)

    def test_path_with_ranges(self):
        argument = split_argument("docs/report.PDF/1-3;7;9-")
        self.assertEqual(argument.path, "docs/report.PDF")
        self.assertEqual(argument.extension, ".pdf")
        self.assertEqual(argument.ranges, [PageRange(1, 3), PageRange(7, 7), PageRange(9, 0)])

    def test_output_marker(self):
        argument = split_argument("combined.pdf/o")
        self.assertTrue(argument.is_output)
        self.assertEqual(argument.path, "combined.pdf")
        self.assertEqual(argument.ranges, [])

    def test_directory_with_dot_is_not_a_modifier(self):
        argument = split_argument("release.v2/notes")
        self.assertEqual(argument.path, "release.v2/notes")
        self.assertEqual(argument.modifier, "")
        self.assertFalse(argument.is_document)

    def test_invalid_ranges(self):
        with self.assertRaises(InvalidRangeError):
            split_argument("report.pdf/one-two")

    def test_file_list(self):
        argument = split_argument("chapters.txt")
        self.assertTrue(argument.is_file_list)
        self.assertFalse(argument.is_document)


class TestCombinePlan(unittest.TestCase):
    """Test cases for building a plan from raw arguments."""

    @classmethod
    def setUpClass(cls):
        cls.temp_dir = tempfile.mkdtemp()
        cls.list_path = os.path.join(cls.temp_dir, "chapters.txt")
        with open(cls.list_path, "w", encoding="utf-8-sig") as handle:
            handle.write("one.pdf\r\ntwo.pdf\n\nignored.pdf\n")

    @classmethod
    def tearDownClass(cls):
        shutil.rmtree(cls.temp_dir, ignore_errors=True)

    def test_read_file_list_stops_at_blank_line(self):
        self.assertEqual(read_file_list(self.list_path), ["one.pdf", "two.pdf"])

    def test_read_file_list_missing(self):
        with self.assertRaises(InvalidPDFError):
            read_file_list(os.path.join(self.temp_dir, "missing.txt"))

    def test_sources_and_output_marker(self):
        plan = build_combine_plan(["a.pdf/2-", "out.pdf/o", "b.pdf", "readme.md"])
        self.assertEqual([item.path for item in plan.inputs], ["a.pdf", "b.pdf"])
        self.assertEqual(plan.inputs[0].ranges, [PageRange(2, 0)])
        self.assertEqual(plan.output, "out.pdf")
        self.assertEqual(plan.ignored, ["readme.md"])

    def test_list_file_sets_default_output(self):
        plan = build_combine_plan([self.list_path])
        self.assertEqual([item.path for item in plan.inputs], ["one.pdf", "two.pdf"])
        self.assertEqual(plan.output, os.path.join(self.temp_dir, "chapters.pdf"))

    def test_argument_after_list_file_is_output(self):
        plan = build_combine_plan([self.list_path, "book.pdf", "extra.pdf"])
        self.assertEqual(plan.output, "book.pdf")
        self.assertEqual([item.path for item in plan.inputs], ["one.pdf", "two.pdf", "extra.pdf"])


class TestFormatsAndNaming(unittest.TestCase):
    """Test cases for format checks and output naming."""

    def test_check_format(self):
        self.assertEqual(check_format("a.PDF"), "PDF")
        for name in ("a.xps", "a.pxl", "a.pcl"):
            with self.assertRaises(UnsupportedFormatError):
                check_format(name)
        with self.assertRaises(UnsupportedFormatError):
            check_format("a.docx")

    def test_default_output_path(self):
        temp_dir = Path(tempfile.mkdtemp())
        try:
            self.assertEqual(default_output_path(".pdf", temp_dir), temp_dir / "Combined.pdf")
            (temp_dir / "Combined.pdf").touch()
            (temp_dir / "Combined1.pdf").touch()
            self.assertEqual(default_output_path(".pdf", temp_dir), temp_dir / "Combined2.pdf")
        finally:
            shutil.rmtree(temp_dir, ignore_errors=True)

    def test_format_file_size(self):
        self.assertEqual(format_file_size(500), "500.0 B")
        self.assertEqual(format_file_size(1536), "1.5 KB")
        self.assertEqual(format_file_size(1048576), "1.0 MB")


class TestDocumentInfo(unittest.TestCase):
    """Test cases for document inspection."""

    def setUp(self):
        self.temp_dir = tempfile.mkdtemp()
        self.pdf_path = os.path.join(self.temp_dir, "info.pdf")
        writer = PdfWriter()
        writer.add_blank_page(width=200, height=200)
        writer.add_blank_page(width=200, height=200)
        parent = writer.add_outline_item("Start", 0)
        writer.add_outline_item("Next", 1, parent=parent)
        writer.add_named_destination("Intro", 0)
        with open(self.pdf_path, "wb") as handle:
            writer.write(handle)

    def tearDown(self):
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def test_get_document_info(self):
        info = get_document_info(self.pdf_path)

        self.assertIsInstance(info, DocumentInfo)
        self.assertEqual(info.num_pages, 2)
        self.assertEqual(info.bookmarks, 2)
        self.assertEqual(info.named_destinations, 1)
        self.assertEqual(info.layers, 0)
        self.assertGreater(info.file_size, 0)
        self.assertFalse(info.is_encrypted)

    def test_get_document_info_missing_file(self):
        with self.assertRaises(InvalidPDFError):
            get_document_info("/nonexistent/file.pdf")


class TestLogger(unittest.TestCase):
    """Test cases for the console logger helper."""

    def test_handler_is_attached_once(self):
        logger = get_logger("pdf_combiner_tests", logging.DEBUG)
        get_logger("pdf_combiner_tests", logging.DEBUG)

        self.assertEqual(len(logger.handlers), 1)
        self.assertEqual(logger.level, logging.DEBUG)
        self.assertEqual(logger.handlers[0].formatter._fmt, LOG_FORMAT)
        self.assertFalse(logger.propagate)


if __name__ == '__main__':
    unittest.main()
