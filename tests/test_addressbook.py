"""
Tests for address book loading and validation.
"""

import pytest
import yaml

from fundtrace.addressbook.loader import AddressBook, AddressBookError, AddressBookLoader
from fundtrace.utils import get_addressbook_path


@pytest.fixture
def book_dir(tmp_path):
    (tmp_path / "seeds.yaml").write_text(yaml.safe_dump({"seeds": ["S2", "S1", "S2"]}))
    (tmp_path / "exchanges.yaml").write_text(yaml.safe_dump({"exchanges": {"EX1": "Exchange One", "EX2": None}}))
    return tmp_path


def test_load_all(book_dir):
    book = AddressBookLoader(config_dir=book_dir).load_all()

    assert book.seeds == ["S2", "S1"]
    assert book.known_wallets == {"EX1": "Exchange One", "EX2": ""}
    assert "EX2" in book.known_wallets


def test_exchanges_as_plain_list(tmp_path):
    path = tmp_path / "ex.yaml"
    path.write_text(yaml.safe_dump({"exchanges": ["EX1", "EX2"]}))

    exchanges = AddressBookLoader(exchanges_file=path).load_exchanges()

    assert set(exchanges) == {"EX1", "EX2"}


def test_explicit_files_override_dir(book_dir, tmp_path):
    other = tmp_path / "other_seeds.yaml"
    other.write_text("seeds:\n  - ONLY\n")

    loader = AddressBookLoader(config_dir=book_dir, seeds_file=other)

    assert loader.load_seeds() == ["ONLY"]


def test_empty_file_means_no_seeds(tmp_path):
    path = tmp_path / "seeds.yaml"
    path.write_text("")

    assert AddressBookLoader(seeds_file=path).load_seeds() == []


@pytest.mark.parametrize("content", [
    "seeds: not-a-list\n",
    "seeds:\n  - 12\n",
    "- just\n- a list\n",
])
def test_malformed_seeds(tmp_path, content):
    path = tmp_path / "seeds.yaml"
    path.write_text(content)

    with pytest.raises(AddressBookError):
        AddressBookLoader(seeds_file=path).load_seeds()


def test_label():
    book = AddressBook(known_wallets={"EX": "Big Exchange", "ANON": ""})

    assert book.label("EX") == "Big Exchange (EX)"
    assert book.label("ANON") == "ANON"
    assert book.label("OTHER") == "OTHER"


def test_shipped_files_load():
    book = AddressBookLoader(config_dir=get_addressbook_path()).load_all()

    assert isinstance(book.seeds, list)
    assert isinstance(book.known_wallets, dict)
