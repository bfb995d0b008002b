import pytest
from pydantic import ValidationError

from app.models.species import Kingdom
from app.schemas.species import SpeciesForm
from tests.utils.factories import wolf_form_input


def test_wolf_input_is_normalized():
    # Act
    form = SpeciesForm.model_validate(wolf_form_input())

    # Assert
    assert form.scientific_name == "Canis lupus"
    assert form.common_name is None
    assert form.description is None
    assert form.kingdom is Kingdom.ANIMALIA
    assert form.total_population == 300000
    assert form.image == "https://example.com/wolf.jpg"


@pytest.mark.parametrize("name", ["", "   ", "\t\n"])
def test_blank_scientific_name_is_rejected(name):
    with pytest.raises(ValidationError) as exc:
        SpeciesForm.model_validate(wolf_form_input(scientific_name=name))

    assert exc.value.errors()[0]["loc"] == ("scientific_name",)


def test_missing_scientific_name_is_rejected():
    data = wolf_form_input()
    del data["scientific_name"]

    with pytest.raises(ValidationError):
        SpeciesForm.model_validate(data)


@pytest.mark.parametrize("field", ["common_name", "description"])
@pytest.mark.parametrize("value", ["", "    ", None])
def test_blank_optional_text_becomes_absent(field, value):
    form = SpeciesForm.model_validate(wolf_form_input(**{field: value}))

    assert getattr(form, field) is None


def test_optional_text_is_trimmed():
    form = SpeciesForm.model_validate(
        wolf_form_input(common_name="  Gray wolf ", description=" Pack hunter.  ")
    )

    assert form.common_name == "Gray wolf"
    assert form.description == "Pack hunter."


def test_kingdom_defaults_to_animalia():
    data = wolf_form_input()
    del data["kingdom"]

    assert SpeciesForm.model_validate(data).kingdom is Kingdom.ANIMALIA


@pytest.mark.parametrize("kingdom", [k.value for k in Kingdom])
def test_every_kingdom_is_accepted(kingdom):
    assert SpeciesForm.model_validate(wolf_form_input(kingdom=kingdom)).kingdom == kingdom


@pytest.mark.parametrize("kingdom", ["Mammalia", "animalia", "", "Chromista"])
def test_unknown_kingdom_is_rejected(kingdom):
    with pytest.raises(ValidationError) as exc:
        SpeciesForm.model_validate(wolf_form_input(kingdom=kingdom))

    assert exc.value.errors()[0]["loc"] == ("kingdom",)


@pytest.mark.parametrize(
    "population", [0, -1, -300000, 2.5, "2.5", "many", True, False]
)
def test_invalid_population_is_rejected(population):
    with pytest.raises(ValidationError) as exc:
        SpeciesForm.model_validate(wolf_form_input(total_population=population))

    assert exc.value.errors()[0]["loc"] == ("total_population",)


@pytest.mark.parametrize("population", [None, "", "   "])
def test_absent_population_is_allowed(population):
    form = SpeciesForm.model_validate(wolf_form_input(total_population=population))

    assert form.total_population is None


def test_population_from_form_text_is_parsed():
    form = SpeciesForm.model_validate(wolf_form_input(total_population=" 42 "))

    assert form.total_population == 42


def test_missing_population_is_allowed():
    data = wolf_form_input()
    del data["total_population"]

    assert SpeciesForm.model_validate(data).total_population is None


@pytest.mark.parametrize(
    "image",
    [
        "not a url",
        "example.com/wolf.jpg",
        "http://",
        "javascript:alert(document.cookie)",
        "data:text/html,<script>alert(1)</script>",
        "ftp://example.com/wolf.jpg",
    ],
)
def test_malformed_image_url_is_rejected(image):
    with pytest.raises(ValidationError) as exc:
        SpeciesForm.model_validate(wolf_form_input(image=image))

    error = exc.value.errors()[0]
    assert error["loc"] == ("image",)
    assert "Image must be a valid URL" in error["msg"]


def test_image_url_is_trimmed_but_not_normalized():
    form = SpeciesForm.model_validate(
        wolf_form_input(image="  https://Example.com/wolf.jpg  ")
    )

    assert form.image == "https://Example.com/wolf.jpg"


@pytest.mark.parametrize("image", ["", "   ", None])
def test_blank_image_is_absent(image):
    assert SpeciesForm.model_validate(wolf_form_input(image=image)).image is None
