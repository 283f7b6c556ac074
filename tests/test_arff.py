import numpy as np
import pytest

from id3py import BucketedDomain, CategoricalDomain, load_arff, parse_arff
from id3py.catalog import MAX_BUCKET, UNKNOWN_LABEL, AttributeCatalog, CatalogBuilder
from id3py.exceptions import (
    ArffError,
    EmptyDataRowError,
    FieldCountMismatchError,
    InvalidClassAttributeError,
    InvalidNumericValueError,
    MalformedAttributeLineError,
    UnmatchedCategoricalValueError,
)

_TEXT = """% comment line
@relation tiny

@attribute outlook { sunny, overcast ,rainy}
@attribute temp numeric
@ATTRIBUTE windy {TRUE,FALSE}
@attribute play {yes, no}

@DATA
sunny,1.2,TRUE,no
overcast, 3.9 ,FALSE,yes
% comment inside the data section
rainy,0.4,?,yes
"""


def _doc(*rows, header="@attribute a {x, y}\n@attribute b numeric\n@attribute c {pos, neg}\n@data\n"):
    return header + "".join(row + "\n" for row in rows)


def test_parse_catalog():
    data = parse_arff(_TEXT)
    catalog = data.catalog
    assert [a.name for a in catalog] == ["outlook", "temp", "windy", "play"]
    assert catalog[0].domain == CategoricalDomain(("sunny", "overcast", "rainy", UNKNOWN_LABEL))
    assert catalog[1].domain == BucketedDomain(4)
    assert catalog[2].domain.labels == ("TRUE", "FALSE", UNKNOWN_LABEL)
    # the class domain has no reserved unknown label
    assert catalog.class_labels == ("yes", "no")
    assert catalog.n_features == 3
    assert catalog.n_classes == 2


def test_parse_records():
    records = parse_arff(_TEXT).records
    assert len(records) == 3
    np.testing.assert_array_equal(records.features, [[0, 1, 0], [1, 3, 1], [2, 0, 2]])
    np.testing.assert_array_equal(records.targets, [1, 0, 0])
    assert records[2].features == (2, 0, 2)
    assert records[2].target == 0


def test_bucketed_values_are_floored():
    text = "@attribute v numeric\n@attribute c {a}\n@data\n1.2,a\n3.9,a\n0.4,a\n"
    data = parse_arff(text)
    assert data.records.features[:, 0].tolist() == [1, 3, 0]
    assert data.catalog[0].domain.size == 4


def test_bucketed_domain_without_data_is_empty():
    data = parse_arff("@attribute v real\n@attribute c {a, b}\n@data\n")
    assert data.catalog[0].domain == BucketedDomain(0)
    assert len(data.records) == 0
    assert data.records.features.shape == (0, 1)


def test_unknown_marker_matches_reserved_label_only():
    data = parse_arff(_doc("?,1,pos"))
    assert data.records[0].features[0] == data.catalog[0].domain.index_of(UNKNOWN_LABEL)


def test_malformed_attribute_line():
    with pytest.raises(MalformedAttributeLineError) as exc:
        parse_arff("@attribute\n@attribute c {a}\n@data\n")
    assert exc.value.line_number == 1


def test_empty_data_row():
    with pytest.raises(EmptyDataRowError) as exc:
        parse_arff(_doc("x,1,pos", "", "y,2,neg"))
    assert exc.value.line_number == 6


def test_field_count_mismatch():
    with pytest.raises(FieldCountMismatchError) as exc:
        parse_arff(_doc("x,1"))
    assert exc.value.expected == 3
    assert exc.value.actual == 2


def test_unmatched_categorical_value():
    with pytest.raises(UnmatchedCategoricalValueError) as exc:
        parse_arff(_doc("z,1,pos"))
    assert exc.value.attribute == "a"
    assert exc.value.value == "z"
    assert exc.value.labels == ("x", "y", UNKNOWN_LABEL)


def test_unknown_class_value_is_rejected():
    with pytest.raises(UnmatchedCategoricalValueError):
        parse_arff(_doc("x,1,?"))


@pytest.mark.parametrize("value", ["abc", "-1.5", "nan", "inf", "?", ""])
def test_invalid_numeric_value(value):
    with pytest.raises(InvalidNumericValueError) as exc:
        parse_arff(_doc(f"x,{value},pos"))
    assert exc.value.attribute == "b"


@pytest.mark.parametrize(
    "text",
    [
        "",
        "@data\n",
        "@attribute a {x}\n@attribute c numeric\n@data\nx,1\n",
    ],
)
def test_invalid_class_attribute(text):
    with pytest.raises(InvalidClassAttributeError):
        parse_arff(text)


def test_errors_share_a_base_class():
    with pytest.raises(ArffError):
        parse_arff(_doc("z,1,pos"))
    with pytest.raises(ValueError):
        parse_arff(_doc("x,1,pos,extra"))


def test_catalog_builder_is_two_phase():
    builder = CatalogBuilder()
    builder.add_bucketed("v")
    builder.add_categorical("c", ["a", "b"])
    builder.seal()
    assert builder.resolve(0, "2.5") == 2
    assert builder.resolve(0, "0.1") == 0
    assert builder.resolve(1, " b ") == 1
    with pytest.raises(RuntimeError):
        builder.add_bucketed("late")
    catalog = builder.freeze()
    assert catalog[0].domain.size == 3
    assert isinstance(catalog, AttributeCatalog)


def test_load_arff_from_file(tmp_path):
    path = tmp_path / "tiny.arff"
    path.write_text(_TEXT)
    data = load_arff(path)
    assert len(data.records) == 3
    assert data.catalog == parse_arff(_TEXT).catalog


def test_load_example_dataset(weather_path):
    data = load_arff(weather_path)
    assert len(data.records) == 14
    assert data.catalog.feature_names == ["outlook", "temperature", "humidity", "windy"]
    assert data.catalog[1].domain.size == 30


def test_shuffle_keeps_records(weather_path):
    data = load_arff(weather_path)
    shuffled = data.shuffled(seed=3)
    assert shuffled.catalog is data.catalog
    assert sorted(map(tuple, shuffled.records.features.tolist())) == sorted(map(tuple, data.records.features.tolist()))
    assert shuffled.records.targets.sum() == data.records.targets.sum()
    # same seed, same order
    np.testing.assert_array_equal(data.shuffled(seed=3).records.features, shuffled.records.features)


def test_bucket_index_is_capped():
    data = parse_arff(_doc(f"x,{MAX_BUCKET}.5,pos"))
    assert data.catalog[1].domain.size == MAX_BUCKET + 1
    with pytest.raises(InvalidNumericValueError) as exc:
        parse_arff(_doc("x,1,pos", "y,1e12,neg"))
    assert exc.value.line_number == 6
    assert "largest supported bucket" in str(exc.value)
