import pytest

from core.physics import Vector3, RigidBody
from core.scene import SphereCollider, BoundaryCollider


class TestColliders:

    def test_sphere_closest_point_inside_is_point_itself(self):
        collider = SphereCollider(Vector3(0, 0, 0), 1.0)
        point = Vector3(0.2, 0.1, 0)
        assert collider.closest_point(point) == point

    def test_sphere_closest_point_outside_is_on_surface(self):
        collider = SphereCollider(Vector3(0, 0, 0), 1.0)
        assert collider.closest_point(Vector3(3, 0, 0)) == Vector3(1, 0, 0)

    def test_boundary_overlaps_only_outside(self):
        boundary = BoundaryCollider(Vector3.zero(), radius=10.0, height=5.0)
        assert not boundary.overlaps_sphere(Vector3(0, 2, 0), 0.1)
        assert boundary.overlaps_sphere(Vector3(9.95, 2, 0), 0.1)
        assert boundary.overlaps_sphere(Vector3(0, 0.05, 0), 0.1)
        assert boundary.overlaps_sphere(Vector3(0, 4.95, 0), 0.1)

    def test_collider_ids_are_unique(self):
        a = SphereCollider(Vector3.zero(), 1.0)
        b = SphereCollider(Vector3.zero(), 1.0)
        assert a.id != b.id

    def test_compare_tag(self):
        assert SphereCollider(Vector3.zero(), 1.0, tag="nectar").compare_tag("nectar")


class TestPhysicsScene:

    def test_trigger_enter_then_stay(self, scene, recorder):
        trigger = scene.add_collider(SphereCollider(Vector3(0, 1, 0), 0.5, tag="nectar", is_trigger=True))
        body = RigidBody(position=Vector3(0, 1, 0))
        scene.subscribe(body, recorder)

        scene.step(0.02)
        scene.step(0.02)

        assert recorder.events == [("enter", trigger.id), ("stay", trigger.id)]

    def test_trigger_does_not_block_motion(self, scene, recorder):
        scene.add_collider(SphereCollider(Vector3(0, 1, 0), 0.5, is_trigger=True))
        body = RigidBody(position=Vector3(0, 1, 0), drag=0.0)
        body.velocity = Vector3(1, 0, 0)
        scene.subscribe(body, recorder)

        scene.step(0.1)
        assert body.position.x == pytest.approx(0.1)

    def test_solid_collision_reverts_and_fires_once(self, scene, recorder):
        wall = scene.add_collider(SphereCollider(Vector3(0.2, 1, 0), 0.1))
        body = RigidBody(position=Vector3(0, 1, 0), radius=0.07, drag=0.0)
        body.velocity = Vector3(1, 0, 0)
        scene.subscribe(body, recorder)

        scene.step(0.1)
        assert body.position == Vector3(0, 1, 0)
        assert body.velocity == Vector3(0, 0, 0)
        assert recorder.events == [("collision", wall.id)]

    def test_overlap_sphere_sees_bodies_unless_ignored(self, scene):
        body = RigidBody(position=Vector3(1, 1, 1), radius=0.07)
        scene.add_body(body)

        assert scene.overlap_sphere(Vector3(1, 1, 1), 0.05) == [body]
        assert scene.overlap_sphere(Vector3(1, 1, 1), 0.05, ignore=(body,)) == []

    def test_removed_collider_is_ignored(self, scene):
        collider = scene.add_collider(SphereCollider(Vector3.zero(), 1.0))
        scene.remove_collider(collider)
        assert scene.overlap_sphere(Vector3.zero(), 0.1) == []

    def test_body_can_leave_existing_overlap(self, scene, recorder):
        # Поверхность в 0.06 от центра: тело радиуса 0.07 уже задевает её
        scene.add_collider(SphereCollider(Vector3(0.16, 2, 0), 0.1))
        body = RigidBody(position=Vector3(0, 2, 0), radius=0.07, drag=0.0)
        scene.subscribe(body, recorder)

        body.velocity = Vector3(-1, 0, 0)
        scene.step(0.02)

        assert body.position.x == pytest.approx(-0.02)
        assert recorder.events == []

    def test_moving_deeper_into_overlap_is_blocked(self, scene):
        scene.add_collider(SphereCollider(Vector3(0.16, 2, 0), 0.1))
        body = RigidBody(position=Vector3(0, 2, 0), radius=0.07, drag=0.0)
        scene.add_body(body)

        body.velocity = Vector3(1, 0, 0)
        scene.step(0.02)

        assert body.position == Vector3(0, 2, 0)
        assert body.velocity == Vector3(0, 0, 0)

    def test_triggers_use_final_position_after_block(self, scene, recorder):
        scene.add_collider(SphereCollider(Vector3(0.2, 1, 0), 0.1))
        scene.add_collider(SphereCollider(Vector3(0.12, 1, 0), 0.01, tag="nectar", is_trigger=True))
        body = RigidBody(position=Vector3(0, 1, 0), radius=0.07, drag=0.0)
        body.velocity = Vector3(1, 0, 0)
        scene.subscribe(body, recorder)

        scene.step(0.1)

        # Пробная позиция задела бы нектар, но тело осталось на месте
        assert body.position == Vector3(0, 1, 0)
        assert [kind for kind, _ in recorder.events] == ["collision"]

    def test_boundary_penetration(self):
        boundary = BoundaryCollider(Vector3.zero(), radius=10.0, height=5.0)
        assert boundary.penetration(Vector3(9.95, 2, 0), 0.1) == pytest.approx(0.05)
        assert boundary.penetration(Vector3(0, 2, 0), 0.1) < 0
