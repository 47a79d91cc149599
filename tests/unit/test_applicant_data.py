"""Unit tests for ApplicantData - the path-addressed answer document."""

import json
from datetime import date

import pytest

from applicant_data.exceptions import (
    DocumentStructureError,
    InvalidDocumentError,
    InvalidPathError,
    LockedApplicantDataError,
    ValueParseError,
)
from applicant_data.path import Path
from applicant_data.scalars import ScalarType
from applicant_data.store.applicant_data import ApplicantData
from applicant_data.utils.currency import Currency


def p(text: str) -> Path:
    return Path.create(text)


@pytest.fixture
def data():
    return ApplicantData()


# =============================================================================
# Hydration and serialization
# =============================================================================


class TestHydration:
    def test_default_document(self, data):
        assert json.loads(data.as_json_string()) == {"applicant": {}}

    def test_round_trip(self):
        raw = '{"applicant":{"name":{"first_name":"Ada"},"kids":[{"entity_name":"x"}]}}'
        assert ApplicantData(raw).as_json_string() == raw

    def test_non_ascii_kept(self):
        data = ApplicantData('{"applicant":{"city":"Zürich"}}')
        assert "Zürich" in data.as_json_string()

    @pytest.mark.parametrize("raw", ["not json", "[1, 2]", '"applicant"', "42", "{"])
    def test_invalid_json_raises(self, raw):
        with pytest.raises(InvalidDocumentError):
            ApplicantData(raw)


class TestEquality:
    def test_equal_by_content(self):
        a = ApplicantData()
        b = ApplicantData()
        a.put_string(p("applicant.name"), "x")
        b.put_string(p("applicant.name"), "x")
        assert a == b
        assert hash(a) == hash(b)

    def test_different_content(self):
        a = ApplicantData()
        b = ApplicantData()
        a.put_string(p("applicant.name"), "x")
        assert a != b


# =============================================================================
# Writes and reads
# =============================================================================


class TestPutAndRead:
    def test_put_string_creates_parents(self, data):
        data.put_string(p("applicant.favorite.color"), "blue")
        assert data.read_string(p("applicant.favorite.color")) == "blue"
        assert json.loads(data.as_json_string()) == {"applicant": {"favorite": {"color": "blue"}}}

    def test_put_string_overwrites(self, data):
        data.put_string(p("applicant.color"), "blue")
        data.put_string(p("applicant.color"), "red")
        assert data.read_string(p("applicant.color")) == "red"

    def test_put_long_from_string_and_int(self, data):
        data.put_long(p("applicant.age"), "42")
        data.put_long(p("applicant.siblings"), 3)
        assert data.read_long(p("applicant.age")) == 42
        assert data.read_long(p("applicant.siblings")) == 3

    def test_put_long_rejects_garbage(self, data):
        with pytest.raises(ValueParseError):
            data.put_long(p("applicant.age"), "forty")
        with pytest.raises(ValueParseError):
            data.put_long(p("applicant.age"), 4.5)
        assert not data.has_path(p("applicant.age"))

    def test_put_date_stores_epoch_millis(self, data):
        data.put_date(p("applicant.dob"), "2021-05-10")
        assert data.read_long(p("applicant.dob")) == 1620604800000
        assert data.read_date(p("applicant.dob")) == date(2021, 5, 10)

    def test_put_date_invalid(self, data):
        with pytest.raises(ValueParseError):
            data.put_date(p("applicant.dob"), "05/10/2021")

    def test_put_currency(self, data):
        data.put_currency_dollars(p("applicant.income"), "1,234.56")
        assert data.read_long(p("applicant.income")) == 123456
        assert data.read_currency(p("applicant.income")) == Currency(123456)

    def test_put_currency_invalid(self, data):
        with pytest.raises(ValueParseError):
            data.put_currency_dollars(p("applicant.income"), "12.5")

    def test_put_list(self, data):
        data.put_list(p("applicant.selections"), [1, 2, 3])
        assert data.read_list(p("applicant.selections")) == [1, 2, 3]

    def test_put_list_replaces_existing(self, data):
        data.put_list(p("applicant.selections"), [1, 2, 3])
        data.put_list(p("applicant.selections"), ["7"])
        assert data.read_list(p("applicant.selections")) == [7]

    def test_put_empty_list_removes_array(self, data):
        data.put_list(p("applicant.selections"), [1, 2])
        data.put_list(p("applicant.selections"), [])
        assert not data.has_path(p("applicant.selections"))

    def test_write_into_array_element(self, data):
        data.put_string(p("applicant.children[0].name"), "Ann")
        data.put_string(p("applicant.children[1].name"), "Bob")
        data.put_string(p("applicant.children[0].name"), "Anne")
        doc = json.loads(data.as_json_string())
        assert doc["applicant"]["children"] == [{"name": "Anne"}, {"name": "Bob"}]

    def test_array_stays_contiguous(self, data):
        data.put_string(p("applicant.children[2].name"), "Cy")
        children = json.loads(data.as_json_string())["applicant"]["children"]
        assert len(children) == 3
        assert children[2] == {"name": "Cy"}

    def test_null_ancestor_replaced(self):
        data = ApplicantData('{"applicant":{"address":null}}')
        data.put_string(p("applicant.address.city"), "Seattle")
        assert data.read_string(p("applicant.address.city")) == "Seattle"

    def test_scalar_ancestor_raises(self):
        data = ApplicantData('{"applicant":{"address":"somewhere"}}')
        with pytest.raises(DocumentStructureError):
            data.put_string(p("applicant.address.city"), "Seattle")


class TestEmptyInputClears:
    @pytest.mark.parametrize(
        "method", ["put_string", "put_long", "put_date", "put_currency_dollars"]
    )
    def test_empty_clears_existing(self, data, method):
        data._put(p("applicant.field"), 5)
        getattr(data, method)(p("applicant.field"), "")
        assert not data.has_path(p("applicant.field"))

    def test_empty_on_absent_path_is_noop(self, data):
        data.put_date(p("applicant.dob"), "")
        assert not data.has_path(p("applicant.dob"))
        assert json.loads(data.as_json_string()) == {"applicant": {}}


class TestReadMismatch:
    def test_absent_reads_none(self, data):
        assert data.read_string(p("applicant.nothing")) is None
        assert data.read_long(p("applicant.nothing")) is None
        assert data.read_date(p("applicant.nothing")) is None
        assert data.read_currency(p("applicant.nothing")) is None
        assert data.read_list(p("applicant.nothing")) is None

    def test_type_mismatch_reads_none(self):
        data = ApplicantData('{"applicant":{"age":"old","name":7,"flag":true,"mixed":[1,"a"]}}')
        assert data.read_long(p("applicant.age")) is None
        assert data.read_string(p("applicant.name")) is None
        assert data.read_long(p("applicant.flag")) is None
        assert data.read_list(p("applicant.mixed")) is None

    def test_null_reads_none(self):
        data = ApplicantData('{"applicant":{"age":null}}')
        assert data.read_long(p("applicant.age")) is None

    def test_read_through_scalar_is_none(self):
        data = ApplicantData('{"applicant":{"name":"x"}}')
        assert data.read_string(p("applicant.name.first")) is None
        assert not data.has_path(p("applicant.name.first"))


class TestReadAsString:
    def test_string(self, data):
        data.put_string(p("applicant.color"), "blue")
        assert data.read_as_string(p("applicant.color")) == "blue"

    def test_list(self, data):
        data.put_list(p("applicant.selections"), [1, 2, 3])
        assert data.read_as_string(p("applicant.selections")) == "[1, 2, 3]"

    def test_absent(self, data):
        assert data.read_as_string(p("applicant.color")) is None


class TestPresenceChecks:
    def test_has_path_counts_null(self):
        data = ApplicantData('{"applicant":{"age":null}}')
        assert data.has_path(p("applicant.age"))
        assert not data.has_value_at_path(p("applicant.age"))

    def test_has_value(self, data):
        data.put_long(p("applicant.age"), 3)
        assert data.has_path(p("applicant.age"))
        assert data.has_value_at_path(p("applicant.age"))

    def test_out_of_range_index(self, data):
        data.put_string(p("applicant.kids[0].name"), "a")
        assert data.has_path(p("applicant.kids[0]"))
        assert not data.has_path(p("applicant.kids[1]"))


# =============================================================================
# Typed dispatch
# =============================================================================


class TestTypedDispatch:
    @pytest.mark.parametrize(
        "scalar_type,raw,expected",
        [
            (ScalarType.STRING, "hello", "hello"),
            (ScalarType.LONG, "12", 12),
            (ScalarType.DATE, "2021-05-10", date(2021, 5, 10)),
            (ScalarType.CURRENCY_CENTS, "3.50", Currency(350)),
            (ScalarType.LIST_OF_LONGS, "1, 2,3", [1, 2, 3]),
        ],
    )
    def test_put_then_read(self, data, scalar_type, raw, expected):
        data.put_scalar(p("applicant.value"), scalar_type, raw)
        assert data.read_scalar(p("applicant.value"), scalar_type) == expected

    def test_accepts_enum_value_strings(self, data):
        data.put_scalar(p("applicant.value"), "long", "5")
        assert data.read_scalar(p("applicant.value"), "long") == 5

    def test_blank_list_clears(self, data):
        data.put_scalar(p("applicant.value"), ScalarType.LIST_OF_LONGS, "1,2")
        data.put_scalar(p("applicant.value"), ScalarType.LIST_OF_LONGS, "")
        assert not data.has_path(p("applicant.value"))


# =============================================================================
# Deletes and repeated entities
# =============================================================================


class TestDelete:
    def test_maybe_delete(self, data):
        data.put_string(p("applicant.color"), "blue")
        data.maybe_delete(p("applicant.color"))
        assert not data.has_path(p("applicant.color"))

    def test_maybe_delete_absent_is_noop(self, data):
        data.maybe_delete(p("applicant.missing.deeper"))
        assert json.loads(data.as_json_string()) == {"applicant": {}}

    def test_maybe_delete_array_element_shifts(self, data):
        data.put_list(p("applicant.selections"), [1, 2, 3])
        data.maybe_delete(p("applicant.selections[0]"))
        assert data.read_list(p("applicant.selections")) == [2, 3]


class TestRepeatedEntities:
    path = Path.create("applicant.household")

    def test_put_and_read(self, data):
        data.put_repeated_entities(self.path, ["Ann", "Bob"])
        assert data.read_repeated_entities(self.path) == ["Ann", "Bob"]

    def test_put_keeps_nested_answers(self, data):
        data.put_repeated_entities(self.path, ["Ann"])
        data.put_long(p("applicant.household[0].age"), 30)
        data.put_repeated_entities(self.path, ["Anne", "Bob"])
        assert data.read_long(p("applicant.household[0].age")) == 30
        assert data.read_repeated_entities(self.path) == ["Anne", "Bob"]

    def test_empty_name_kept(self, data):
        data.put_repeated_entities(self.path, ["", "Bob"])
        assert data.read_repeated_entities(self.path) == ["", "Bob"]

    def test_put_empty_list_stores_empty_array(self, data):
        data.put_repeated_entities(self.path, [])
        assert data.has_path(self.path)
        assert data.read_repeated_entities(self.path) == []

    def test_read_absent(self, data):
        assert data.read_repeated_entities(self.path) == []

    def test_delete_multiple(self, data):
        data.put_repeated_entities(self.path, ["a", "b", "c", "d"])
        assert data.delete_repeated_entities(self.path, [0, 2])
        assert data.read_repeated_entities(self.path) == ["b", "d"]

    def test_delete_unsorted_and_duplicate_indices(self, data):
        data.put_repeated_entities(self.path, ["a", "b", "c", "d"])
        assert data.delete_repeated_entities(self.path, [3, 1, 3])
        assert data.read_repeated_entities(self.path) == ["a", "c"]

    def test_delete_out_of_range(self, data):
        data.put_repeated_entities(self.path, ["a", "b"])
        assert not data.delete_repeated_entities(self.path, [0, 5])
        assert data.read_repeated_entities(self.path) == ["a", "b"]

    def test_delete_nothing(self, data):
        assert not data.delete_repeated_entities(self.path, [])

    def test_maybe_clear_removes_empty_array(self, data):
        data.put_repeated_entities(self.path, [])
        assert data.maybe_clear_repeated_entities(self.path)
        assert not data.has_path(self.path)

    def test_maybe_clear_keeps_entities(self, data):
        data.put_repeated_entities(self.path, ["a"])
        assert not data.maybe_clear_repeated_entities(self.path)
        assert data.read_repeated_entities(self.path) == ["a"]


# =============================================================================
# Locking
# =============================================================================


class TestLock:
    @pytest.mark.parametrize(
        "mutate",
        [
            lambda d: d.put_string(p("applicant.x"), "v"),
            lambda d: d.put_string(p("applicant.x"), ""),
            lambda d: d.put_long(p("applicant.x"), 1),
            lambda d: d.put_date(p("applicant.x"), "2020-01-01"),
            lambda d: d.put_currency_dollars(p("applicant.x"), "1.00"),
            lambda d: d.put_list(p("applicant.x"), [1]),
            lambda d: d.put_repeated_entities(p("applicant.x"), ["a"]),
            lambda d: d.maybe_delete(p("applicant.x")),
            lambda d: d.maybe_clear_array(p("applicant.x[0]")),
            lambda d: d.delete_repeated_entities(p("applicant.x"), [0]),
            lambda d: d.maybe_clear_repeated_entities(p("applicant.x")),
            lambda d: d.set_preferred_locale("fr"),
            lambda d: d.set_user_name("Ada Lovelace"),
            lambda d: d.merge_from(ApplicantData('{"applicant":{"y":1}}')),
        ],
    )
    def test_locked_rejects_mutation(self, mutate):
        data = ApplicantData('{"applicant":{"x":"old"}}')
        data.lock()
        before = data.as_json_string()
        with pytest.raises(LockedApplicantDataError):
            mutate(data)
        assert data.as_json_string() == before

    def test_reads_allowed_after_lock(self):
        data = ApplicantData('{"applicant":{"x":"old"}}')
        data.lock()
        assert data.is_locked
        assert data.read_string(p("applicant.x")) == "old"
        assert data.eval_predicate("$.applicant.x")

    def test_error_message(self, data):
        data.lock()
        with pytest.raises(LockedApplicantDataError, match="locked"):
            data.put_string(p("applicant.x"), "v")


# =============================================================================
# Applicant name and locale
# =============================================================================


class TestApplicantName:
    def test_anonymous(self, data):
        assert data.get_applicant_name() == "<Anonymous Applicant>"

    def test_first_only(self, data):
        data.set_user_name("Cher")
        assert data.get_applicant_name() == "Cher"

    def test_first_last(self, data):
        data.set_user_name("Ada Lovelace")
        assert data.get_applicant_name() == "Lovelace, Ada"

    def test_three_parts(self, data):
        data.set_user_name("Mary Ann Evans")
        assert data.read_string(p("applicant.name.middle_name")) == "Ann"
        assert data.get_applicant_name() == "Evans, Mary"

    def test_many_parts_stored_whole(self, data):
        data.set_user_name("A B C D")
        assert data.read_string(p("applicant.name.first_name")) == "A B C D"
        assert not data.has_path(p("applicant.name.last_name"))

    def test_does_not_overwrite(self, data):
        data.set_user_name_parts("Grace", last_name="Hopper")
        data.set_user_name("Someone Else")
        assert data.get_applicant_name() == "Hopper, Grace"


class TestPreferredLocale:
    def test_default_from_config(self, data):
        assert not data.has_preferred_locale()
        assert data.preferred_locale == "en-US"

    def test_constructor_locale(self):
        data = ApplicantData(preferred_locale="es-US")
        assert data.has_preferred_locale()
        assert data.preferred_locale == "es-US"

    def test_set_locale(self, data):
        data.set_preferred_locale("zh-Hant-TW")
        assert data.preferred_locale == "zh-Hant-TW"

    def test_invalid_locale(self, data):
        with pytest.raises(ValueError):
            data.set_preferred_locale("not a locale")


# =============================================================================
# Contiguity and edge cases
# =============================================================================


class TestArrayContiguity:
    """Writes at arbitrary indices in arbitrary order leave no gaps."""

    def test_ancestor_indices_out_of_order(self, data):
        for index in (3, 0, 5):
            data.put_string(p(f"applicant.kids[{index}].entity_name"), f"kid{index}")

        kids = json.loads(data.as_json_string())["applicant"]["kids"]
        assert len(kids) == 6
        for index in range(6):
            assert data.has_path(p(f"applicant.kids[{index}]"))
        assert data.read_repeated_entities(p("applicant.kids")) == [
            "kid0", "", "", "kid3", "", "kid5",
        ]

    def test_leaf_indices_out_of_order(self, data):
        for index in (3, 0, 5):
            data.put_long(p(f"applicant.numbers[{index}]"), index)

        numbers = json.loads(data.as_json_string())["applicant"]["numbers"]
        assert numbers == [0, None, None, 3, None, 5]
        for index in range(6):
            assert data.has_path(p(f"applicant.numbers[{index}]"))


class TestUnrepresentableDate:
    @pytest.mark.parametrize("millis", [100000000000000000, -(2 ** 63), 2 ** 63 - 1])
    def test_out_of_range_millis_reads_none(self, millis):
        data = ApplicantData(json.dumps({"applicant": {"dob": millis}}))
        assert data.read_date(p("applicant.dob")) is None
        assert data.read_scalar(p("applicant.dob"), ScalarType.DATE) is None
        assert data.read_long(p("applicant.dob")) == millis


class TestClearRepeatedEntitiesTwice:
    def test_second_clear_also_reports_empty(self, data):
        path = p("applicant.household")
        data.put_repeated_entities(path, [])

        assert data.maybe_clear_repeated_entities(path)
        assert data.maybe_clear_repeated_entities(path)
        assert not data.has_path(path)


class TestRootPath:
    def test_delete_root_raises(self, data):
        with pytest.raises(InvalidPathError):
            data.maybe_delete(Path.empty())
        assert json.loads(data.as_json_string()) == {"applicant": {}}
