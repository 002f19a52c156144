import pytest

from schema_table_picker.services.query_processor import QueryProcessor, STOPWORDS, is_blank


@pytest.fixture
def processor():
    return QueryProcessor()


def test_tokenize_lowercases_and_strips_punctuation(processor):
    assert processor.tokenize("Find all Orders, please!") == ["find", "all", "orders", "please"]


def test_tokenize_deletes_punctuation_without_inserting_space(processor):
    assert processor.tokenize("user,order") == ["userorder"]
    assert processor.tokenize("orders?!.") == ["orders"]


def test_tokenize_keeps_other_punctuation(processor):
    assert processor.tokenize("user's order;") == ["user's", "order;"]


def test_tokenize_drops_single_character_tokens(processor):
    assert processor.tokenize("a b cd x") == ["cd"]


def test_tokenize_splits_on_any_whitespace_run(processor):
    assert processor.tokenize("  orders\t\n users   ") == ["orders", "users"]


@pytest.mark.parametrize("query", ["", "   ", "\t\n"])
def test_tokenize_blank_query_is_empty(processor, query):
    assert processor.tokenize(query) == []


def test_stopword_set_is_exact():
    assert STOPWORDS == {
        "the", "a", "an", "and", "or", "but", "in", "on", "at", "to", "for",
        "of", "with", "by", "from", "up", "about", "into", "over", "after",
        "all", "find", "get", "show", "list", "display", "where", "which",
    }


def test_filter_stopwords_keeps_order_and_duplicates(processor):
    tokens = ["show", "orders", "and", "users", "orders"]
    assert processor.filter_stopwords(tokens) == ["orders", "users", "orders"]


def test_extract_query_terms_example(processor):
    terms = processor.extract_query_terms("find all orders with user information")
    assert terms == ["orders", "user", "information"]


def test_extract_query_terms_only_stopwords(processor):
    assert processor.extract_query_terms("Show me all of the list") == ["me"]


def test_custom_stopwords_replace_defaults():
    processor = QueryProcessor(stopwords={"orders"})
    assert processor.extract_query_terms("find orders") == ["find"]


def test_tokenize_splits_on_unicode_spaces_and_byte_order_mark(processor):
    assert processor.tokenize("\ufefforders\u00a0users\u3000items") == ["orders", "users", "items"]


def test_tokenize_keeps_control_separators_inside_tokens(processor):
    assert processor.tokenize("orders\x1cusers") == ["orders\x1cusers"]


@pytest.mark.parametrize("text,blank", [
    (None, True),
    ("", True),
    (" \t\n", True),
    ("\ufeff\u2028", True),
    ("\x1c", False),
    (" orders ", False),
])
def test_is_blank(text, blank):
    assert is_blank(text) is blank
