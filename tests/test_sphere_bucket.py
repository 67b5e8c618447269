# MIT License (see LICENSE)
import pytest
from sphere_bucket import SphereBucket, Particle, Vector2, Dimension2
from sphere_bucket.container import ParticleContainer
from sphere_bucket.invariants import layer_counts, occupancy_conflicts, dangling_particles


def make_bucket(width=100.0, **kwargs):
    """Bucket at the origin; width 100 with radius 10 gives 4 bottom slots."""
    return SphereBucket(position=Vector2(0, 0), size=Dimension2(width, 50), sphere_radius=10.0, **kwargs)


def fill(bucket, n):
    particles = [Particle.at(0, 200) for _ in range(n)]
    for p in particles:
        bucket.add_particle_first_open(p, animate=False)
    return particles


def test_default_configuration():
    bucket = SphereBucket()
    assert bucket.sphere_radius == 10.0
    assert bucket.usable_width_proportion == 1.0
    assert bucket.vertical_particle_offset == pytest.approx(-4.0)
    assert len(bucket) == 0

    explicit = SphereBucket(vertical_particle_offset=0.0)
    assert explicit.vertical_particle_offset == 0.0


@pytest.mark.parametrize("kwargs", [
    {"sphere_radius": 0.0},
    {"sphere_radius": -1.0},
    {"usable_width_proportion": 0.0},
    {"usable_width_proportion": 1.5},
])
def test_invalid_configuration(kwargs):
    with pytest.raises(ValueError):
        SphereBucket(**kwargs)


def test_first_open_fills_bottom_left_to_right():
    bucket = make_bucket()
    particles = fill(bucket, 4)
    assert [p.destination for p in particles] == [
        Vector2(-30.0, -4.0),
        Vector2(-10.0, -4.0),
        Vector2(10.0, -4.0),
        Vector2(30.0, -4.0),
    ]
    # animate=False places the particle instantly
    assert all(p.position == p.destination for p in particles)


def test_first_open_ignores_current_position():
    bucket = make_bucket()
    p = Particle.at(1000, -1000)
    bucket.add_particle_first_open(p, animate=False)
    assert p.destination == Vector2(-30.0, -4.0)


def test_animated_add_only_sets_destination():
    bucket = make_bucket()
    p = Particle.at(5, 100)
    bucket.add_particle_first_open(p, animate=True)
    assert p.position == Vector2(5, 100)
    assert p.destination == Vector2(-30.0, -4.0)
    assert bucket.contains_particle(p)

    # occupancy uses the destination, so the next particle goes elsewhere
    q = Particle.at(5, 100)
    bucket.add_particle_first_open(q, animate=True)
    assert q.destination == Vector2(-10.0, -4.0)


def test_pyramid_layer_counts():
    """N bottom slots and N + 1 particles: N on layer 0, one on layer 1."""
    bucket = make_bucket()
    assert bucket.lattice.base_slot_count == 4
    particles = fill(bucket, 5)
    assert layer_counts(bucket) == {0: 4, 1: 1}
    assert particles[-1].destination.x == -20.0


def test_full_pyramid_then_column():
    """Past the apex, particles stack one-wide above it."""
    bucket = make_bucket(width=80.0)
    particles = fill(bucket, 8)
    assert layer_counts(bucket) == {0: 3, 1: 2, 2: 1, 3: 1, 4: 1}
    assert {p.destination.x for p in particles[5:]} == {0.0}
    assert occupancy_conflicts(bucket) == []


def test_nearest_open_uses_incoming_destination():
    bucket = make_bucket()
    p = Particle.at(12, 100)
    bucket.add_particle_nearest_open(p, animate=False)
    assert p.destination == Vector2(10.0, -4.0)
    assert p.position == p.destination

    q = Particle.at(-100, 0)
    bucket.add_particle_nearest_open(q, animate=False)
    assert q.destination == Vector2(-30.0, -4.0)


def test_nearest_open_requires_support():
    """An unsupported upper slot is skipped even when it is closer."""
    bucket = make_bucket()
    bucket.add_particle_first_open(Particle.at(0, 0), animate=False)  # (-30, -4)
    y1 = bucket.get_y_position_for_layer(1)

    # (-20, y1) has only one supporter, so the bottom slot wins
    p = Particle.at(-20, y1)
    bucket.add_particle_nearest_open(p, animate=False)
    assert p.destination == Vector2(-10.0, -4.0)

    # now (-20, y1) is held up by two particles and is the nearest
    q = Particle.at(-20, y1 + 1)
    bucket.add_particle_nearest_open(q, animate=False)
    assert q.destination == Vector2(-20.0, y1)
    assert bucket.count_supporting_particles(q.destination) == 2


def test_nearest_open_falls_back_to_zero():
    """With a full pyramid, the slot above the apex has a single supporter."""
    bucket = make_bucket(width=40.0)  # one bottom slot
    fill(bucket, 1)
    assert bucket.get_nearest_open_position(Vector2(100, 100)) == Vector2.ZERO


def test_add_particle_is_nearest_open():
    bucket = make_bucket()
    container: ParticleContainer = bucket
    p = Particle.at(28, 50)
    container.add_particle(p)
    assert p.destination == Vector2(30.0, -4.0)
    assert container.includes(p)


def test_add_twice_is_contract_violation():
    bucket = make_bucket()
    p = Particle.at(0, 0)
    bucket.add_particle_first_open(p, animate=False)
    with pytest.raises(AssertionError):
        bucket.add_particle_first_open(p, animate=False)


def test_add_twice_leaves_particle_in_place(monkeypatch):
    """With assertions off, re-adding a member changes nothing."""
    monkeypatch.setenv("SPHERE_BUCKET_ASSERTIONS", "0")
    bucket = make_bucket()
    p = Particle.at(0, 0)
    bucket.add_particle_first_open(p, animate=False)
    slot = p.destination

    bucket.add_particle_first_open(p, animate=False)
    bucket.add_particle_nearest_open(p, animate=False)
    assert p.destination == slot
    assert p.position == slot
    assert len(bucket) == 1
    assert p.user_controlled_property.listener_count == 1

    # the slot still reads as taken
    q = Particle.at(0, 0)
    bucket.add_particle_first_open(q, animate=False)
    assert q.destination != slot
    assert occupancy_conflicts(bucket) == []


def test_membership_round_trip():
    bucket = make_bucket()
    p = Particle.at(0, 0)
    bucket.add_particle_first_open(p, animate=False)
    assert bucket.contains_particle(p)
    bucket.remove_particle(p)
    assert not bucket.contains_particle(p)
    assert len(bucket) == 0


def test_remove_unlinks_listener():
    bucket = make_bucket()
    p = Particle.at(0, 0)
    bucket.add_particle_first_open(p, animate=False)
    assert p.user_controlled_property.listener_count == 1
    assert bucket.removal_listener_count == 1

    bucket.remove_particle(p)
    assert p.user_controlled_property.listener_count == 0
    assert bucket.removal_listener_count == 0

    # grabbing after removal must not touch the bucket
    p.user_controlled = True
    assert len(bucket) == 0


def test_remove_non_member(monkeypatch):
    bucket = make_bucket()
    fill(bucket, 2)
    stranger = Particle.at(0, 0)
    with pytest.raises(AssertionError):
        bucket.remove_particle(stranger)

    monkeypatch.setenv("SPHERE_BUCKET_ASSERTIONS", "0")
    bucket.remove_particle(stranger)
    assert len(bucket) == 2


def test_reset_empties_without_listeners():
    bucket = make_bucket()
    particles = fill(bucket, 6)
    destinations = [p.destination for p in particles]

    bucket.reset()
    assert len(bucket) == 0
    assert bucket.particles == ()
    assert bucket.removal_listener_count == 0
    for p in particles:
        assert not bucket.contains_particle(p)
        assert p.user_controlled_property.listener_count == 0
    # no relayout happened
    assert [p.destination for p in particles] == destinations

    bucket.reset()
    assert len(bucket) == 0


def test_grab_removes_particle():
    """Setting user_controlled to True pulls the particle out of the bucket."""
    bucket = make_bucket()
    particles = fill(bucket, 5)
    top = particles[-1]
    top.user_controlled = True
    assert not bucket.contains_particle(top)
    assert len(bucket) == 4
    assert top.user_controlled_property.listener_count == 0


def test_release_does_not_remove():
    bucket = make_bucket()
    p = Particle.at(0, 0)
    p.user_controlled = True
    bucket.add_particle_first_open(p, animate=False)
    p.user_controlled = False
    assert bucket.contains_particle(p)


def test_extract_closest_particle():
    bucket = make_bucket()
    particles = fill(bucket, 4)

    extracted = bucket.extract_closest_particle(Vector2(12, 0))
    assert extracted is particles[2]
    assert extracted.user_controlled
    assert not bucket.contains_particle(extracted)
    assert len(bucket) == 3


def test_extract_uses_current_position():
    bucket = make_bucket()
    first = Particle.at(100, 100)
    second = Particle.at(-100, 100)
    bucket.add_particle_first_open(first, animate=True)   # slot (-30, -4)
    bucket.add_particle_first_open(second, animate=True)  # slot (-10, -4)

    # by destination `first` is closer, but positions still lag behind
    extracted = bucket.extract_closest_particle(Vector2(-100, 100))
    assert extracted is second


def test_extract_already_user_controlled():
    bucket = make_bucket()
    p = Particle.at(0, 0)
    p.user_controlled = True
    bucket.add_particle_first_open(p, animate=False)
    assert bucket.extract_closest_particle(Vector2(0, 0)) is p
    assert not bucket.contains_particle(p)


def test_extract_from_empty_bucket():
    bucket = make_bucket()
    assert bucket.extract_closest_particle(Vector2(0, 0)) is None


def test_particle_list_is_a_copy():
    bucket = make_bucket()
    particles = fill(bucket, 3)
    listed = bucket.get_particle_list()
    assert listed == particles
    listed.clear()
    assert len(bucket) == 3


def test_moving_bucket_moves_lattice():
    bucket = make_bucket()
    bucket.position = Vector2(100, 50)
    p = Particle.at(0, 0)
    bucket.add_particle_first_open(p, animate=False)
    assert p.destination == Vector2(70.0, 46.0)


def test_invariant_helpers_report_problems():
    bucket = make_bucket()
    first, second = fill(bucket, 2)
    assert occupancy_conflicts(bucket) == []
    assert dangling_particles(bucket) == []

    second.destination = first.destination
    assert occupancy_conflicts(bucket) == [(first, second)]

    second.destination = Vector2(-20.0, 100.0)
    assert dangling_particles(bucket) == [second]


if __name__ == "__main__":
    pytest.main([__file__])
