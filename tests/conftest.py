"""Shared fixtures for the analysis engine tests."""

import pytest

from autoeda.csv_table import parse


@pytest.fixture
def small_csv():
    """One numeric and one categorical column."""
    return "a,b\n1,x\n2,y\n3,x\n"


@pytest.fixture
def small_table(small_csv):
    return parse(small_csv)


@pytest.fixture
def regression_table():
    """Numeric target 'y' with a numeric feature."""
    return parse("x,y\n10,1\n20,2\n30,3\n")


@pytest.fixture
def separable_table():
    """Two well separated classes, three rows each."""
    return parse(
        "f1,f2,label\n"
        "0.0,0.0,a\n"
        "0.1,0.0,a\n"
        "0.0,0.1,a\n"
        "10.0,10.0,b\n"
        "10.1,10.0,b\n"
        "10.0,10.1,b\n"
    )


@pytest.fixture
def mixed_table():
    """Numeric, categorical, text and all-missing columns with gaps."""
    header = "id,score,city,comment,empty"
    rows = []
    for i in range(30):
        score = "" if i % 10 == 0 else str(i * 1.5)
        city = ["Oslo", "Lima", "Pune"][i % 3]
        rows.append(f"{i},{score},{city},comment number {i},")
    return parse(header + "\n" + "\n".join(rows) + "\n")
