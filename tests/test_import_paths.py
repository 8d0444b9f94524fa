import pytest

from pggen.import_paths import validate_import_path


@pytest.mark.parametrize("path", ['"foo"', 'blip "foo"'])
def test_valid_paths(path):
    assert validate_import_path(path) is None


@pytest.mark.parametrize(
    ("path", "pattern"),
    [
        ('"foo', "import paths without spaces in them should be quoted strings"),
        ("foo", "import paths without spaces in them should be quoted strings"),
        ("", "import paths without spaces in them should be quoted strings"),
        ('foo"', "import paths without spaces in them should be quoted strings"),
        ('"foo" "bar"', "import paths containing spaces should be aliased quoted strings"),
        ('9oo "bar"', "import paths containing spaces should be aliased quoted strings"),
        ('oo bar"', "import paths containing spaces should be aliased quoted strings"),
        ('oo b"ar"', "import paths containing spaces should be aliased quoted strings"),
    ],
)
def test_invalid_paths(path, pattern):
    with pytest.raises(ValueError, match=pattern):
        validate_import_path(path)