# Turns a raw Distance Matrix response into a flat list of results for display.

from api_structures import DistanceResult, Location

NOT_AVAILABLE = 'N/A'


def calc_distance_matrix(distance_results: dict, locations: list[Location]) -> list[DistanceResult]:
    """
    Flattens the origin x destination matrix in row-major order.

    The locations are the list the query was made with. It serves as both the
    origins (row index) and the destinations (element index), so it must be at
    least as long as the matrix is wide and tall. Missing keys or too few
    locations raise KeyError / IndexError instead of being skipped.
    """
    distances = []
    result_id = 0
    for i, row in enumerate(distance_results['rows']):
        for j, element in enumerate(row['elements']):
            status = element['status']
            if status == 'OK':
                duration = f"{element['duration']['value']} seconds"
                distance = f"{element['distance']['value']} meters"
            else:
                duration = NOT_AVAILABLE
                distance = NOT_AVAILABLE
            distances.append(DistanceResult(
                id=result_id,
                status=status,
                from_coordinate=locations[i].as_coordinate(),
                from_address=distance_results['origin_addresses'][i],
                to_coordinate=locations[j].as_coordinate(),
                to_address=distance_results['destination_addresses'][j],
                duration=duration,
                distance=distance,
            ))
            result_id += 1
    return distances
