"""
Unit tests for the command-line tokenizer.

Tests whitespace splitting, quoting, escaping and the failure cases.
"""

import pytest

from mini_explorer.tools.tokenizer import tokenize, TokenizeError


class TestTokenize:
    """Test cases for tokenize()."""
    
    def test_simple_words(self):
        """Test splitting on single spaces."""
        assert tokenize("cp note.txt backup/") == ["cp", "note.txt", "backup/"]
    
    def test_whitespace_runs_collapse(self):
        """Test that runs of spaces, tabs and line breaks yield no empty tokens."""
        assert tokenize("  ls \t -s \r\n") == ["ls", "-s"]
    
    def test_empty_and_blank_lines(self):
        """Test that blank input gives an empty token list."""
        assert tokenize("") == []
        assert tokenize("   \t  ") == []
    
    def test_double_quotes_keep_spaces(self):
        """Test that double quotes group words."""
        assert tokenize('touch "my file.txt"') == ["touch", "my file.txt"]
    
    def test_single_quotes_keep_spaces(self):
        """Test that single quotes group words."""
        assert tokenize("mkdir 'new dir'") == ["mkdir", "new dir"]
    
    def test_other_quote_is_literal_inside_quotes(self):
        """Test that a quote of the other kind is kept inside a quoted region."""
        assert tokenize("touch \"it's\"") == ["touch", "it's"]
        assert tokenize("touch 'say \"hi\"'") == ["touch", 'say "hi"']
    
    def test_quotes_join_adjacent_text(self):
        """Test that a quoted region continues the surrounding token."""
        assert tokenize('stat a"b c"d') == ["stat", "ab cd"]
    
    def test_empty_quotes_produce_no_token(self):
        """Test that an empty quoted region alone adds nothing."""
        assert tokenize("touch ''") == ["touch"]
    
    def test_backslash_escapes_space(self):
        """Test that an escaped space stays in the token."""
        assert tokenize(r"touch my\ file") == ["touch", "my file"]
    
    def test_backslash_escapes_quote_and_backslash(self):
        """Test escaping quotes and backslashes, inside and outside quotes."""
        assert tokenize(r"touch a\"b") == ["touch", 'a"b']
        assert tokenize(r"touch a\\b") == ["touch", "a\\b"]
        assert tokenize(r'touch "a\"b"') == ["touch", 'a"b']
        assert tokenize(r"touch 'a\'b'") == ["touch", "a'b"]
    
    def test_unmatched_single_quote_fails(self):
        """Test that an open single quote is rejected."""
        with pytest.raises(TokenizeError):
            tokenize("touch 'oops")
    
    def test_unmatched_double_quote_fails(self):
        """Test that an open double quote is rejected."""
        with pytest.raises(TokenizeError):
            tokenize('touch "oops')
    
    def test_trailing_backslash_fails(self):
        """Test that a lone trailing backslash is rejected."""
        with pytest.raises(TokenizeError):
            tokenize("touch file\\")
    
    def test_escaped_trailing_backslash_is_fine(self):
        """Test that an escaped backslash at the end is accepted."""
        assert tokenize("touch file\\\\") == ["touch", "file\\"]
    
    def test_tokenize_error_is_value_error(self):
        """Test the exception hierarchy."""
        assert issubclass(TokenizeError, ValueError)
    
    def test_reconstruction_is_stable(self):
        """Test that quoting tokens back into a line re-tokenizes identically."""
        lines = ['cp "a b" c', "mv 'x\"y' z", r"touch a\ b\\c"]
        for line in lines:
            tokens = tokenize(line)
            rebuilt = " ".join(
                "'" + t.replace("\\", "\\\\").replace("'", "\\'") + "'" for t in tokens
            )
            assert tokenize(rebuilt) == tokens
