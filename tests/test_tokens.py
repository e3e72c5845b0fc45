"""Tests for tokens and the token cursor."""

import dataclasses

import pytest

from cssast import Token, TokenCursor, TokenError


# ---------------------------------------------------------------------------
# Token
# ---------------------------------------------------------------------------


class TestFromDict:
    def test_fields(self) -> None:
        token = Token.from_dict(
            {"kind": "property", "name": "color", "value": "red", "start": {"line": 1}}
        )
        assert token == Token("property", name="color", value="red", start={"line": 1})

    def test_unknown_keys_ignored(self) -> None:
        token = Token.from_dict({"kind": "selector", "text": "a", "extra": 1})
        assert token == Token("selector", text="a")

    def test_type_key(self) -> None:
        assert Token.from_dict({"type": "media", "prefix": "@media"}).kind == "media"

    def test_kind_wins_over_type(self) -> None:
        assert Token.from_dict({"kind": "page", "type": "media"}).kind == "page"

    @pytest.mark.parametrize("record", [{}, {"kind": ""}, {"kind": 3}, {"name": "a"}])
    def test_missing_kind(self, record: dict) -> None:
        with pytest.raises(TokenError):
            Token.from_dict(record)

    def test_not_a_mapping(self) -> None:
        with pytest.raises(TokenError):
            Token.from_dict(["property"])  # type: ignore[arg-type]


class TestToken:
    def test_frozen(self) -> None:
        token = Token("property", name="color")
        with pytest.raises(dataclasses.FrozenInstanceError):
            token.name = "margin"  # type: ignore[misc]

    def test_repr_skips_empty_fields(self) -> None:
        assert repr(Token("selector", text="a")) == "Token('selector', text='a')"


# ---------------------------------------------------------------------------
# Cursor
# ---------------------------------------------------------------------------


A = Token("selector", text="a")
B = Token("property", name="color", value="red")
C = Token("block-end")


class TestTokenCursor:
    def test_take_in_order(self) -> None:
        cursor = TokenCursor([A, B, C])
        assert [cursor.take(), cursor.take(), cursor.take()] == [A, B, C]

    def test_take_when_empty(self) -> None:
        cursor = TokenCursor([A])
        cursor.take()
        assert cursor.take() is None
        assert cursor.take() is None

    def test_put_back(self) -> None:
        cursor = TokenCursor([A, B])
        token = cursor.take()
        cursor.put_back(token)
        assert cursor.take() is A
        assert cursor.take() is B

    def test_put_back_after_exhaustion(self) -> None:
        cursor = TokenCursor([A])
        cursor.put_back(cursor.take())
        assert cursor.take() is A
        assert cursor.take() is None

    def test_second_put_back_fails(self) -> None:
        cursor = TokenCursor([A, B])
        cursor.put_back(cursor.take())
        with pytest.raises(RuntimeError):
            cursor.put_back(B)

    def test_len(self) -> None:
        cursor = TokenCursor([A, B, C])
        assert len(cursor) == 3
        token = cursor.take()
        assert len(cursor) == 2
        cursor.put_back(token)
        assert len(cursor) == 3
        assert cursor

    def test_copies_source(self) -> None:
        tokens = [A, B]
        cursor = TokenCursor(tokens)
        tokens.clear()
        assert cursor.take() is A
