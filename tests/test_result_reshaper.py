import pytest

from api_structures import Location
from result_reshaper import calc_distance_matrix

LOCATIONS = [Location(id=0, lat=52.36, lng=4.88), Location(id=1, lat=52.08, lng=4.31)]


def test_two_by_two_matrix(matrix_response):
    results = calc_distance_matrix(matrix_response, LOCATIONS)

    assert [r.id for r in results] == [0, 1, 2, 3]
    first, last = results[0], results[3]
    assert first.from_coordinate == "52.36,4.88"
    assert first.to_coordinate == "52.36,4.88"
    assert first.from_address == "Leidseplein, Amsterdam"
    assert first.duration == "600 seconds"
    assert first.distance == "1000 meters"
    assert last.from_coordinate == "52.08,4.31"
    assert last.to_coordinate == "52.08,4.31"
    assert last.to_address == "Binnenhof, Den Haag"
    assert last.duration == "300 seconds"
    assert last.distance == "4000 meters"


def test_row_major_pairing(matrix_response):
    results = calc_distance_matrix(matrix_response, LOCATIONS)
    pairs = [(r.from_coordinate, r.to_coordinate) for r in results]
    assert pairs == [
        ("52.36,4.88", "52.36,4.88"),
        ("52.36,4.88", "52.08,4.31"),
        ("52.08,4.31", "52.36,4.88"),
        ("52.08,4.31", "52.08,4.31"),
    ]
    assert results[2].duration == "1200 seconds"


def test_ids_run_across_rows():
    locations = [Location(id=i, lat=i, lng=i) for i in range(3)]
    response = {
        "origin_addresses": ["a", "b"],
        "destination_addresses": ["a", "b", "c"],
        "rows": [{"elements": [{"status": "ZERO_RESULTS"}] * 3}] * 2,
    }
    results = calc_distance_matrix(response, locations)
    assert len(results) == 6
    assert [r.id for r in results] == list(range(6))


def test_failed_elements_are_not_available(matrix_response):
    matrix_response["rows"][0]["elements"][1] = {"status": "NOT_FOUND"}
    results = calc_distance_matrix(matrix_response, LOCATIONS)
    assert results[1].status == "NOT_FOUND"
    assert results[1].duration == "N/A"
    assert results[1].distance == "N/A"
    assert results[0].duration == "600 seconds"


def test_values_are_not_converted():
    response = {
        "origin_addresses": ["a"],
        "destination_addresses": ["a"],
        "rows": [{"elements": [{
            "status": "OK",
            "duration": {"value": 3601},
            "distance": {"value": 123456},
        }]}],
    }
    result = calc_distance_matrix(response, LOCATIONS[:1])[0]
    assert result.duration == "3601 seconds"
    assert result.distance == "123456 meters"


def test_empty_matrix():
    response = {"origin_addresses": [], "destination_addresses": [], "rows": []}
    assert calc_distance_matrix(response, []) == []


def test_missing_fields_raise(matrix_response):
    del matrix_response["rows"][1]["elements"][0]["duration"]
    with pytest.raises(KeyError):
        calc_distance_matrix(matrix_response, LOCATIONS)


def test_too_few_locations_raise(matrix_response):
    with pytest.raises(IndexError):
        calc_distance_matrix(matrix_response, LOCATIONS[:1])
