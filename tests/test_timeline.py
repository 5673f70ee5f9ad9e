import numpy as np
import pytest

from bhcollision.simulation import Phase
from bhcollision.timeline import CollisionTimeline, RenderBody


def test_empty_timeline_interpolates_to_none():
    tl = CollisionTimeline()
    assert len(tl) == 0
    assert tl.interpolate(1.0) is None
    assert tl.merger_frame_index == -1


def test_build_from_result(merger_result):
    tl = CollisionTimeline.build(merger_result)
    assert len(tl) == len(merger_result.frames)
    assert tl.total_duration == np.float32(merger_result.frames[-1].time)
    assert tl.merger_time == np.float32(merger_result.merger_time)
    assert tl.frames[tl.merger_frame_index].phase == Phase.MERGER
    assert tl.merger_frame_index == merger_result.num_inspiral_frames - 1

    first, last = tl.frames[0], tl.frames[-1]
    assert first.num_black_holes == 2
    assert last.num_black_holes == 1
    assert np.allclose(last.black_holes[0].spin_axis, [0.0, 1.0, 0.0])
    assert last.orbital_phase == 0.0
    assert first.black_holes[0].position.dtype == np.float32


def test_interpolate_clamps_to_range(merger_result):
    tl = CollisionTimeline.build(merger_result)
    assert tl.interpolate(-10.0) is tl.frames[0]
    end = tl.interpolate(1e12)
    assert end.time == tl.total_duration
    assert end.phase == tl.frames[-1].phase


def test_interpolate_blends_continuous_quantities(merger_result):
    tl = CollisionTimeline.build(merger_result)
    a, b = tl.frames[1], tl.frames[2]
    t = a.time + 0.25 * (b.time - a.time)
    f = tl.interpolate(t)
    assert f.phase == a.phase
    assert f.num_black_holes == 2
    expected = 0.75 * a.gw_strain_plus + 0.25 * b.gw_strain_plus
    assert f.gw_strain_plus == pytest.approx(expected, rel=1e-4, abs=1e-12)
    expected_pos = 0.75 * a.black_holes[0].position + 0.25 * b.black_holes[0].position
    assert np.allclose(f.black_holes[0].position, expected_pos, rtol=1e-5)


def test_discrete_fields_come_from_nearer_frame(merger_result):
    tl = CollisionTimeline.build(merger_result)
    # ringdown -> post-ringdown hand-off
    i = next(
        k for k in range(len(tl) - 1)
        if tl.frames[k].phase == Phase.RINGDOWN and tl.frames[k + 1].phase == Phase.POST_RINGDOWN
    )
    a, b = tl.frames[i], tl.frames[i + 1]
    assert a.phase != b.phase
    near_a = tl.interpolate(a.time + 0.4 * (b.time - a.time))
    near_b = tl.interpolate(a.time + 0.6 * (b.time - a.time))
    assert near_a.phase == a.phase
    assert near_b.phase == b.phase


def test_spin_axes_stay_unit_length(merger_result):
    tl = CollisionTimeline.build(merger_result)
    for t in np.linspace(0.0, float(tl.total_duration), 97):
        frame = tl.interpolate(t)
        assert frame.num_black_holes == len(frame.black_holes)
        for bh in frame.black_holes:
            assert np.linalg.norm(bh.spin_axis) == pytest.approx(1.0, abs=1e-5)


def test_render_body_from_remnant_overrides_axis(merger_result):
    remnant = merger_result.ringdown_frames()[0].remnant
    rb = RenderBody.from_body(remnant, np.array([0.0, 0.0, 1.0]))
    assert np.allclose(rb.spin_axis, [0.0, 0.0, 1.0])
    assert rb.mass == np.float32(remnant.mass)
    assert rb.schwarzschild_radius == np.float32(2.0 * remnant.mass)
