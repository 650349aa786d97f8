import pytest

from jobly.errors import BadRequestError
from jobly.utils.sql import (
    COMPANY_FILTERS,
    JOB_FILTERS,
    bind_params,
    sql_for_filters,
    sql_for_partial_update,
)

COLUMN_MAP = {"firstName": "first_name", "lastName": "last_name", "favColor": "fav_color"}
ALLOWED = {"first_name", "last_name", "fav_color", "username", "email"}


class TestPartialUpdate:
    def test_maps_keys_to_numbered_columns(self):
        data = {
            "firstName": "Matt",
            "favColor": "blue",
            "username": "matt",
            "email": "test@hotmail.com",
        }
        set_cols, values = sql_for_partial_update(data, COLUMN_MAP, ALLOWED)

        assert set_cols == '"first_name"=:p1, "fav_color"=:p2, "username"=:p3, "email"=:p4'
        assert values == ["Matt", "blue", "matt", "test@hotmail.com"]

    def test_positions_match_values(self):
        data = {"email": "a@b.com", "lastName": "Lee"}
        set_cols, values = sql_for_partial_update(data, COLUMN_MAP, ALLOWED)

        assert len(values) == len(data)
        params = bind_params(values)
        fragments = set_cols.split(", ")
        for position, key in enumerate(data, start=1):
            assert fragments[position - 1].endswith(f"=:p{position}")
            assert params[f"p{position}"] == data[key]

    def test_empty_data_rejected(self):
        with pytest.raises(BadRequestError):
            sql_for_partial_update({}, {}, ALLOWED)

    def test_column_outside_allow_list_rejected(self):
        with pytest.raises(BadRequestError) as exc:
            sql_for_partial_update({"is_admin": True}, {}, ALLOWED)
        assert exc.value.message == "Invalid field: is_admin"


class TestBindParams:
    def test_numbers_from_one(self):
        assert bind_params(["a", "b"]) == {"p1": "a", "p2": "b"}

    def test_offset(self):
        assert bind_params(["c"], offset=2) == {"p3": "c"}


class TestFilters:
    def test_min_salary(self):
        clauses, values = sql_for_filters({"minSalary": 2}, JOB_FILTERS)
        assert clauses == ["salary >= :p1"]
        assert values == [2]

    def test_has_equity_binds_nothing(self):
        clauses, values = sql_for_filters({"hasEquity": True, "minSalary": 5}, JOB_FILTERS)
        assert clauses == ["CAST(equity AS REAL) > 0", "salary >= :p1"]
        assert values == [5]

    def test_has_equity_only_accepts_true(self):
        with pytest.raises(BadRequestError) as exc:
            sql_for_filters({"hasEquity": False}, JOB_FILTERS)
        assert exc.value.message == "Invalid filter: hasEquity only accepts true"

    def test_title_is_case_insensitive_substring(self):
        clauses, values = sql_for_filters({"title": "eng", "minSalary": 1}, JOB_FILTERS)
        assert clauses == [
            "lower(title) LIKE '%' || lower(:p1) || '%'",
            "salary >= :p2",
        ]
        assert values == ["eng", 1]

    def test_unknown_key_rejected(self):
        with pytest.raises(BadRequestError) as exc:
            sql_for_filters({"title": "x", "bad": "filter"}, JOB_FILTERS)
        assert exc.value.message == "Invalid filter: bad"

    def test_company_filters(self):
        clauses, values = sql_for_filters(
            {"nameLike": "net", "minEmployees": 10, "maxEmployees": 20}, COMPANY_FILTERS
        )
        assert clauses == [
            "lower(name) LIKE '%' || lower(:p1) || '%'",
            "num_employees >= :p2",
            "num_employees <= :p3",
        ]
        assert values == ["net", 10, 20]

    def test_job_filter_keys_not_valid_for_companies(self):
        with pytest.raises(BadRequestError):
            sql_for_filters({"minSalary": 1}, COMPANY_FILTERS)
