import pytest

from meshforge.vertex import (
    FLOAT_SIZE,
    GL_FLOAT,
    AttribUsage,
    BufferAttribute,
    VertexPosCol,
    VertexPosNormCol,
    VertexPosNormTex,
    VertexPosNormTexCol,
)


def test_attrib_usage_order():
    assert AttribUsage(0) is AttribUsage.UNKNOWN
    assert AttribUsage(1) is AttribUsage.POSITION
    assert AttribUsage(16) is AttribUsage.USER3
    with pytest.raises(ValueError):
        AttribUsage(17)


def test_buffer_attribute_default_usage():
    attr = BufferAttribute(0, 3, GL_FLOAT, False, 12, 0)
    assert attr.usage is AttribUsage.UNKNOWN


def test_stride_matches_flattened_size():
    samples = [
        (VertexPosCol.V_DECL, VertexPosCol().to_floats(), 28),
        (VertexPosNormCol.V_DECL, VertexPosNormCol().to_floats(), 40),
        (VertexPosNormTex.V_DECL, VertexPosNormTex().to_floats(), 32),
        (VertexPosNormTexCol.V_DECL, VertexPosNormTexCol().to_floats(), 48),
    ]
    for decl, floats, stride in samples:
        assert len(floats) * FLOAT_SIZE == stride
        assert all(a.stride == stride for a in decl)


def test_pos_col_declaration():
    assert VertexPosCol.V_DECL == (
        BufferAttribute(0, 3, GL_FLOAT, False, 28, 0, AttribUsage.POSITION),
        BufferAttribute(1, 4, GL_FLOAT, False, 28, 12, AttribUsage.COLOR),
    )


def test_pos_norm_col_declaration():
    assert VertexPosNormCol.V_DECL == (
        BufferAttribute(0, 3, GL_FLOAT, False, 40, 0, AttribUsage.POSITION),
        BufferAttribute(1, 4, GL_FLOAT, False, 40, 24, AttribUsage.COLOR),
        BufferAttribute(2, 3, GL_FLOAT, False, 40, 12, AttribUsage.NORMAL),
    )


def test_pos_norm_tex_declaration():
    assert VertexPosNormTex.V_DECL == (
        BufferAttribute(0, 3, GL_FLOAT, False, 32, 0, AttribUsage.POSITION),
        BufferAttribute(2, 3, GL_FLOAT, False, 32, 12, AttribUsage.NORMAL),
        BufferAttribute(3, 2, GL_FLOAT, False, 32, 24, AttribUsage.TEXTURE),
    )


def test_pos_norm_tex_col_declaration():
    assert VertexPosNormTexCol.V_DECL == (
        BufferAttribute(0, 3, GL_FLOAT, False, 48, 0, AttribUsage.POSITION),
        BufferAttribute(1, 4, GL_FLOAT, False, 48, 32, AttribUsage.COLOR),
        BufferAttribute(2, 3, GL_FLOAT, False, 48, 12, AttribUsage.NORMAL),
        BufferAttribute(3, 2, GL_FLOAT, False, 48, 24, AttribUsage.TEXTURE),
    )


def test_offsets_locate_fields_in_flat_data():
    vert = VertexPosNormTexCol(
        position=(1, 2, 3), normal=(4, 5, 6), uv=(7, 8), color=(9, 10, 11, 12)
    )
    flat = vert.to_floats()
    by_usage = {a.usage: a for a in VertexPosNormTexCol.V_DECL}
    values = {
        AttribUsage.POSITION: vert.position,
        AttribUsage.NORMAL: vert.normal,
        AttribUsage.TEXTURE: vert.uv,
        AttribUsage.COLOR: vert.color,
    }
    for usage, expected in values.items():
        attr = by_usage[usage]
        start = attr.offset // FLOAT_SIZE
        assert flat[start:start + attr.size] == expected


def test_pos_norm_col_flat_layout():
    vert = VertexPosNormCol(position=(1, 2, 3), normal=(0, 1, 0), color=(1, 0, 0, 1))
    assert vert.to_floats() == (1.0, 2.0, 3.0, 0.0, 1.0, 0.0, 1.0, 0.0, 0.0, 1.0)


def test_pos_norm_tex_flat_layout():
    vert = VertexPosNormTex(position=(1, 2, 3), normal=(0, 0, 1), uv=(0.5, 0.25))
    assert vert.to_floats() == (1.0, 2.0, 3.0, 0.0, 0.0, 1.0, 0.5, 0.25)


def test_components_are_converted_to_float_tuples():
    vert = VertexPosCol(position=[1, 2, 3], color=[0, 1, 0, 1])
    assert vert.position == (1.0, 2.0, 3.0)
    assert vert.to_floats() == (1.0, 2.0, 3.0, 0.0, 1.0, 0.0, 1.0)


def test_wrong_component_count_raises():
    with pytest.raises(ValueError):
        VertexPosNormTex(uv=(1.0, 2.0, 3.0))


def test_wrong_color_count_raises():
    with pytest.raises(ValueError):
        VertexPosNormTexCol(color=(1.0, 1.0, 1.0))