import pytest

from tests.conftest import (
    Counted,
    CountedNode,
    CountedTexture,
    Helper,
    LooseNode,
    make_geometry,
)
from wren.errors import ResourceReleaseError
from wren.graphics.resources import Material, ShaderMaterial, Uniform
from wren.scene import Group, Mesh, Scene
from wren.tracking import ResourceTracker


def test_shared_texture_tracked_and_released_once():
    shared = CountedTexture("shared")
    m1 = Material("a", map=shared)
    m2 = Material("b", normal_map=shared)
    mesh = Mesh(make_geometry(), [m1, m2])

    tracker = ResourceTracker()
    tracker.track(mesh)

    # mesh, geometry, two materials, one texture
    assert len(tracker) == 5
    assert shared in tracker

    tracker.dispose_all()

    assert shared.release_count == 1
    assert m1.released and m2.released


def test_dispose_all_twice_releases_nothing_the_second_time():
    res = Counted()
    tracker = ResourceTracker()
    tracker.track(res)

    tracker.dispose_all()
    tracker.dispose_all()

    assert res.release_count == 1
    assert len(tracker) == 0


def test_dispose_all_on_empty_tracker():
    tracker = ResourceTracker()
    tracker.dispose_all()
    assert len(tracker) == 0


def test_track_none_is_noop():
    tracker = ResourceTracker()

    assert tracker.track(None) is None
    assert len(tracker) == 0


def test_track_returns_input_unchanged():
    tracker = ResourceTracker()
    root = Group("root")

    assert tracker.track(root) is root

    textures = [CountedTexture(), CountedTexture()]
    assert tracker.track(textures) is textures


def test_track_sequence_tracks_elements_not_the_list():
    a, b = CountedTexture("a"), CountedTexture("b")
    items = [a, b]

    tracker = ResourceTracker()
    tracker.track(items)

    assert len(tracker) == 2
    assert a in tracker and b in tracker
    assert items not in tracker


def test_uniform_texture_array_is_discovered():
    atlas = [CountedTexture(str(i)) for i in range(3)]
    single = CountedTexture("single")
    material = ShaderMaterial(
        "void main() {}",
        "void main() {}",
        uniforms={
            "u_atlas": Uniform(atlas),
            "u_single": Uniform(single),
            "u_scale": Uniform(2.0),
            "u_empty": Uniform(None),
        },
    )

    tracker = ResourceTracker()
    tracker.track(material)

    for tex in atlas:
        assert tex in tracker
    assert single in tracker
    # material + 4 textures
    assert len(tracker) == 5


def test_material_ignores_non_texture_properties():
    material = Material("plain")
    material.helper = Helper("not a resource")

    tracker = ResourceTracker()
    tracker.track(material)

    assert list(tracker) == [material]


def test_node_detached_before_release():
    scene = Scene()
    node = CountedNode("model")
    scene.add(node)

    tracker = ResourceTracker()
    tracker.track(node)
    tracker.dispose_all()

    assert node not in scene.children
    assert node.parent is None
    assert node.release_count == 1


def test_round_trip_leaves_no_parents():
    scene = Scene()
    root = Group("root")
    inner = Group("inner")
    meshes = [Mesh(make_geometry(), Material(str(i))) for i in range(3)]
    inner.add(*meshes[1:])
    root.add(meshes[0], inner)
    scene.add(root)

    tracker = ResourceTracker()
    nodes = list(root.traverse())
    tracker.track(root)
    tracker.dispose_all()

    assert len(tracker) == 0
    assert scene.children == []
    for node in nodes:
        assert node.parent is None
    for mesh in meshes:
        assert mesh.geometry.released
        assert mesh.material.released


def test_plain_group_is_tracked_without_release():
    group = Group("g")
    tracker = ResourceTracker()
    tracker.track(group)

    assert group in tracker


def test_unclassified_value_is_ignored():
    tracker = ResourceTracker()
    helper = Helper("x")

    assert tracker.track(helper) is helper
    assert len(tracker) == 0


def test_reference_cycle_terminates():
    a, b = LooseNode("a"), LooseNode("b")
    a.link(b)
    b.link(a)

    tracker = ResourceTracker()
    tracker.track(a)

    assert len(tracker) == 2

    tracker.dispose_all()
    assert a.parent is None
    assert b.parent is None


def test_deep_graph_does_not_recurse():
    root = Group("0")
    node = root
    for i in range(1, 5000):
        child = Group(str(i))
        node.add(child)
        node = child

    tracker = ResourceTracker()
    tracker.track(root)

    assert len(tracker) == 5000


def test_tracking_twice_does_not_duplicate():
    tex = CountedTexture()
    material = Material(map=tex)

    tracker = ResourceTracker()
    tracker.track(material)
    tracker.track(material)
    tracker.track(tex)

    assert len(tracker) == 2
    tracker.dispose_all()
    assert tex.release_count == 1


def test_identical_textures_are_distinct():
    a, b = CountedTexture("same"), CountedTexture("same")

    tracker = ResourceTracker()
    tracker.track([a, b, a])

    assert len(tracker) == 2


def test_untrack_keeps_resource_alive():
    shared = CountedTexture("shared")
    mesh = Mesh(make_geometry(), Material(map=shared))

    tracker = ResourceTracker()
    tracker.track(mesh)
    tracker.untrack(shared)
    tracker.dispose_all()

    assert shared.release_count == 0


def test_untrack_absent_is_noop():
    tracker = ResourceTracker()
    tracker.track(Counted())

    tracker.untrack(Counted())
    tracker.untrack(None)

    assert len(tracker) == 1


def test_release_failure_does_not_stop_disposal():
    class Exploding(Counted):
        def release(self) -> None:
            super().release()
            raise RuntimeError("boom")

    bad = Exploding("bad")
    good = [Counted(str(i)) for i in range(3)]

    tracker = ResourceTracker()
    tracker.track([bad, *good])

    with pytest.raises(ResourceReleaseError) as info:
        tracker.dispose_all()

    assert [res for res, _ in info.value.failures] == [bad]
    assert all(res.release_count == 1 for res in good)
    assert len(tracker) == 0

    # Nothing is left to fail a second time.
    tracker.dispose_all()
    assert bad.release_count == 1


def test_detach_failure_does_not_stop_disposal():
    class StuckGroup(Group):
        def remove(self, child) -> None:
            raise RuntimeError("locked")

    parent = StuckGroup("parent")
    child = CountedNode("child")
    parent.add(child)
    res = Counted()

    tracker = ResourceTracker()
    tracker.track([child, res])

    with pytest.raises(ResourceReleaseError) as info:
        tracker.dispose_all()

    assert [r for r, _ in info.value.failures] == [child]
    assert child.release_count == 1
    assert res.release_count == 1
    assert len(tracker) == 0


def test_context_manager_disposes_on_exit():
    res = Counted()

    with pytest.raises(KeyError):
        with ResourceTracker() as tracker:
            tracker.track(res)
            raise KeyError("interrupted")

    assert res.release_count == 1


def test_bound_track_function():
    tracker = ResourceTracker()
    track = tracker.track

    root = track(Group("root"))

    assert root in tracker
