"""
Unit tests for the entry data models.

Tests ListingEntry, SearchResult and FileStatus rendering and validation.
"""

import pytest
from datetime import datetime
from pydantic import ValidationError

from mini_explorer.models.entries import (
    EntryType, ListingEntry, SearchResult, FileStatus,
    format_time, timestamp_to_datetime
)


class TestTimeHelpers:
    """Test cases for the time helpers."""
    
    def test_format_time(self):
        """Test the default rendering."""
        assert format_time(datetime(2020, 1, 2, 3, 4, 5)) == "2020-01-02 03:04:05"
    
    def test_format_unknown_time(self):
        """Test that a missing time renders as '-'."""
        assert format_time(None) == "-"
    
    def test_custom_format(self):
        """Test a configured format."""
        assert format_time(datetime(2020, 1, 2), "%d/%m/%Y") == "02/01/2020"
    
    def test_timestamp_conversion(self):
        """Test timestamp conversion and its failure cases."""
        assert timestamp_to_datetime(None) is None
        assert timestamp_to_datetime(0) == datetime.fromtimestamp(0)
        assert timestamp_to_datetime(1e20) is None


class TestListingEntry:
    """Test cases for ListingEntry."""
    
    def test_file_row(self):
        """Test rendering a file row."""
        entry = ListingEntry(
            name="note.txt",
            entry_type=EntryType.FILE,
            size=12,
            size_bytes=12,
            modified_time=datetime(2021, 1, 1, 0, 0, 0)
        )
        
        assert entry.to_row() == ["note.txt", "File", "12", "2021-01-01 00:00:00"]
        assert not entry.is_dir
    
    def test_directory_row(self):
        """Test that directories get a trailing separator and '-' size."""
        entry = ListingEntry(name="docs", entry_type=EntryType.DIR)
        
        assert entry.display_name == "docs/"
        assert entry.to_row() == ["docs/", "Dir", "-", "-"]
        assert entry.sort_timestamp == 0
    
    def test_sort_timestamp(self):
        """Test that the sort key follows the modification time."""
        when = datetime(2020, 1, 1)
        entry = ListingEntry(name="a", entry_type=EntryType.FILE, modified_time=when)
        assert entry.sort_timestamp == when.timestamp()
    
    def test_sort_timestamp_drops_fractional_seconds(self):
        early = ListingEntry(name="a", entry_type=EntryType.FILE, modified_time=datetime(2020, 1, 1, 0, 0, 5, 100000))
        late = ListingEntry(name="b", entry_type=EntryType.FILE, modified_time=datetime(2020, 1, 1, 0, 0, 5, 900000))
        
        assert early.sort_timestamp == late.sort_timestamp == int(datetime(2020, 1, 1, 0, 0, 5).timestamp())
    
    def test_search_result_keeps_surrogate_escapes(self):
        """Test that undecodable file names survive into the printed result."""
        path = "/tmp/x/bad\udcff.txt"
        assert str(SearchResult.from_path(path, is_dir=False)) == path + " (File)"
    
    def test_negative_size_rejected(self):
        """Test validation of sizes."""
        with pytest.raises(ValidationError):
            ListingEntry(name="a", entry_type=EntryType.FILE, size=-1)
    
    def test_empty_name_rejected(self):
        """Test validation of names."""
        with pytest.raises(ValidationError):
            ListingEntry(name="", entry_type=EntryType.FILE)


class TestSearchResult:
    """Test cases for SearchResult."""
    
    def test_file_result(self):
        """Test rendering a file hit."""
        result = SearchResult.from_path("/tmp/x/note.txt", is_dir=False)
        assert str(result) == "/tmp/x/note.txt (File)"
    
    def test_directory_result(self):
        """Test that directory hits get a trailing separator."""
        result = SearchResult.from_path("/tmp/x/notes", is_dir=True)
        assert result.path == "/tmp/x/notes/"
        assert str(result) == "/tmp/x/notes/ (Dir)"
    
    def test_string_entry_type(self):
        """Test conversion of the display string to the enum."""
        result = SearchResult(path="/a", entry_type="Dir")
        assert result.entry_type == EntryType.DIR
        
        with pytest.raises(ValidationError):
            SearchResult(path="/a", entry_type="Link")


class TestFileStatus:
    """Test cases for FileStatus."""
    
    def test_file_lines(self):
        """Test the six stat lines for a file."""
        when = datetime(2022, 5, 6, 7, 8, 9)
        status = FileStatus(
            entry_type=EntryType.FILE,
            path="/tmp/note.txt",
            size=3,
            created_time=None,
            modified_time=when,
            accessed_time=when
        )
        
        assert status.to_lines() == [
            "Type: File",
            "Path: /tmp/note.txt",
            "Size: 3",
            "Create Time: -",
            "Modify Time: 2022-05-06 07:08:09",
            "Access Time: 2022-05-06 07:08:09",
        ]
    
    def test_directory_size_is_dash(self):
        """Test that directories show '-' for size."""
        status = FileStatus(entry_type=EntryType.DIR, path="/tmp")
        assert status.to_lines()[2] == "Size: -"
