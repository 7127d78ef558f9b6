import io

import pytest

from patternkit.errors.errors import UnknownShapeError
from patternkit.shapes import (
    SHAPE_CONSTRUCTORS,
    Box,
    BoxCreator,
    Oval,
    OvalCreator,
    ShapeKind,
    create_shape,
    creator_for,
)


class TestCreators:
    def test_oval_creator_renders_oval(self, capsys: pytest.CaptureFixture[str]) -> None:
        OvalCreator().create().render()

        out = capsys.readouterr().out
        assert out == "Rendering an oval shape\n"
        assert "rectangular" not in out

    def test_box_creator_renders_box(self, capsys: pytest.CaptureFixture[str]) -> None:
        BoxCreator().create().render()

        out = capsys.readouterr().out
        assert out == "Rendering a rectangular shape\n"
        assert "oval" not in out

    def test_creators_never_cross_produce(self) -> None:
        assert isinstance(OvalCreator().create(), Oval)
        assert isinstance(BoxCreator().create(), Box)
        assert not isinstance(OvalCreator().create(), Box)
        assert not isinstance(BoxCreator().create(), Oval)

    def test_each_call_returns_fresh_shape(self) -> None:
        creator = OvalCreator()
        assert creator.create() is not creator.create()

    def test_render_returns_none_and_writes_to_stream(self) -> None:
        buffer = io.StringIO()
        assert Box().render(buffer) is None
        assert buffer.getvalue() == "Rendering a rectangular shape\n"


class TestCreateShape:
    @pytest.mark.parametrize(
        "kind,expected",
        [
            (ShapeKind.OVAL, Oval),
            (ShapeKind.BOX, Box),
            ("oval", Oval),
            ("BOX", Box),
            ("  Oval ", Oval),
        ],
    )
    def test_create_shape_by_kind(self, kind, expected) -> None:
        shape = create_shape(kind)
        assert isinstance(shape, expected)

    @pytest.mark.parametrize("kind", ["triangle", "", None, 3])
    def test_unknown_kind_raises(self, kind) -> None:
        with pytest.raises(UnknownShapeError) as exc_info:
            create_shape(kind)
        assert exc_info.value.kind == kind

    def test_unknown_shape_error_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            create_shape("hexagon")

    def test_every_kind_has_a_constructor(self) -> None:
        assert set(SHAPE_CONSTRUCTORS) == set(ShapeKind)
        for kind, constructor in SHAPE_CONSTRUCTORS.items():
            assert constructor().kind is kind

    def test_constructor_table_is_read_only(self) -> None:
        with pytest.raises(TypeError):
            SHAPE_CONSTRUCTORS[ShapeKind.OVAL] = Box  # type: ignore[index]

    def test_creator_for(self) -> None:
        assert isinstance(creator_for("oval"), OvalCreator)
        assert isinstance(creator_for(ShapeKind.BOX), BoxCreator)
