import string

import pytest

from src.shortlinks.services.shortcode import ALPHABET, generate_short_code


class TestGenerateShortCode:
    def test_default_length(self):
        assert len(generate_short_code()) == 6

    def test_custom_length(self):
        """Visitor tokens use a longer code"""
        assert len(generate_short_code(36)) == 36

    def test_alphabet(self):
        code = generate_short_code(500)
        assert set(code) <= set(string.ascii_letters + string.digits)
        assert ALPHABET == string.ascii_letters + string.digits

    def test_codes_vary(self):
        codes = {generate_short_code() for _ in range(200)}
        assert len(codes) > 190

    def test_rejects_non_positive_length(self):
        with pytest.raises(ValueError):
            generate_short_code(0)
