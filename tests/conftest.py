"""
Rent Graph - Pytest Configuration and Fixtures

Shared fixtures for all tests:
- Listing fixtures
- Hand-built graph fixtures
- CSV file fixtures
"""

import matplotlib

matplotlib.use("Agg")

import pytest

from rent_graph.core.data_model import Property
from rent_graph.core.graph import ProximityGraph

# =============================================================================
# Listing Fixtures
# =============================================================================

DUBAI_COORDINATES = [
    (25.276987, 55.296249),
    (25.204849, 55.270783),
    (25.171356, 55.212227),
]


@pytest.fixture
def dubai_coordinates() -> list[tuple[float, float]]:
    """Three Dubai coordinates; consecutive pairs lie within 10 km."""
    return list(DUBAI_COORDINATES)


@pytest.fixture
def dubai_properties() -> list[Property]:
    """Listings at the three Dubai coordinates."""
    return [Property(latitude=lat, longitude=lon) for lat, lon in DUBAI_COORDINATES]


@pytest.fixture
def mixed_properties() -> list[Property]:
    """Listings where some coordinates are missing."""
    return [
        Property(latitude=25.276987, longitude=55.296249, rent_per_sqft=120.0),
        Property(latitude=None, longitude=55.270783, rent_per_sqft=80.0),
        Property(latitude=25.204849, longitude=55.270783),
        Property(latitude=25.171356, longitude=None),
        Property(),
        Property(latitude=25.171356, longitude=55.212227, rent_per_sqft=95.5),
    ]


# =============================================================================
# Graph Fixtures
# =============================================================================


@pytest.fixture
def chain_graph() -> ProximityGraph:
    """A-B (5.0) and B-C (7.0), no A-C edge."""
    graph = ProximityGraph(name="chain")
    a = graph.add_node(DUBAI_COORDINATES[0])
    b = graph.add_node(DUBAI_COORDINATES[1])
    c = graph.add_node(DUBAI_COORDINATES[2])
    graph.add_edge(a, b, 5.0)
    graph.add_edge(b, c, 7.0)
    return graph


@pytest.fixture
def detour_graph() -> ProximityGraph:
    """
    Square where the first queued path to node 2 is the long one.

    0-1 (1.0), 0-2 (10.0), 1-3 (1.0), 2-3 (1.0)
    """
    graph = ProximityGraph(name="detour")
    for i in range(4):
        graph.add_node((25.0 + i * 0.01, 55.0))
    graph.add_edge(0, 1, 1.0)
    graph.add_edge(0, 2, 10.0)
    graph.add_edge(1, 3, 1.0)
    graph.add_edge(2, 3, 1.0)
    return graph


# =============================================================================
# File Fixtures
# =============================================================================


@pytest.fixture
def listings_csv(tmp_path):
    """CSV file in the layout of the Dubai listings dataset."""
    path = tmp_path / "dubai_properties.csv"
    path.write_text(
        "Address,Rent,Beds,Baths,Type,Area_in_sqft,Rent_per_sqft,Rent_category,Frequency,"
        "Furnishing,Purpose,Posted_date,Age_of_listing_in_days,Location,City,Latitude,Longitude\n"
        "Downtown Tower,124000,1,2,Apartment,1000,124.0,Medium,Yearly,Unfurnished,For Rent,"
        "2024-03-07,45,Downtown Dubai,Dubai,25.276987,55.296249\n"
        "Business Bay Loft,140000,2,2,Apartment,1400,100.0,High,Yearly,Furnished,For Rent,"
        "2024-03-08,44,Business Bay,Dubai,25.204849,55.270783\n"
        "Al Quoz Villa,99000,Studio,1,Villa,900,110.0,Low,Yearly,Unfurnished,For Rent,"
        "2024-03-09,43,Al Quoz,Dubai,25.171356,55.212227\n"
        "Unknown Place,50000,1,1,Apartment,500,,Low,Yearly,Unfurnished,For Rent,"
        "2024-03-10,42,Somewhere,Dubai,,55.1\n"
        "Bad Coordinates,60000,1,1,Apartment,600,100.0,Low,Yearly,Unfurnished,For Rent,"
        "2024-03-11,41,Nowhere,Dubai,abc,55.2\n",
        encoding="utf-8",
    )
    return path
