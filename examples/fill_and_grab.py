# examples/fill_and_grab.py
from sphere_bucket import SphereBucket, Particle, Vector2, Dimension2
from sphere_bucket.invariants import layer_counts

bucket = SphereBucket(position=Vector2(0.0, 0.0), size=Dimension2(120.0, 40.0), sphere_radius=10.0)

# drop balls from above; they animate into their slots
balls = [Particle.at(x, 150.0) for x in (-40.0, -10.0, 25.0, 5.0, -30.0, 45.0, 0.0)]
for ball in balls:
    bucket.add_particle_nearest_open(ball, animate=True)

dt = 1 / 60
t = 0.0
while not all(b.at_destination for b in balls):
    for b in balls:
        b.step(dt)
    t += dt

print("settled after t:", round(t, 3))
print("layers:", layer_counts(bucket))

# the user grabs the ball nearest the bottom-left corner
grabbed = bucket.extract_closest_particle(Vector2(-60.0, -5.0))
print("grabbed from:", grabbed.position)
print("layers:", layer_counts(bucket))
for b in bucket.particles:
    print("  ", b.destination)
