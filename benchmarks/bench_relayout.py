"""
Microbenchmark: time to fill a bucket and empty it again vs bucket width.
Run:
  python benchmarks/bench_relayout.py
"""
import time
import numpy as np
from sphere_bucket import SphereBucket, Particle, Vector2, Dimension2

def run(slots: int, repeats: int = 20):
    radius = 10.0
    width = 2 * radius * (slots + 1)
    capacity = slots * (slots + 1) // 2
    rng = np.random.default_rng(12345)  # same drop and grab points on every run

    fill_times = []
    empty_times = []
    for _ in range(repeats):
        bucket = SphereBucket(position=Vector2(0, 0), size=Dimension2(width, 50), sphere_radius=radius)
        particles = [Particle.at(float(rng.uniform(-width / 2, width / 2)), 200.0) for _ in range(capacity)]

        t0 = time.perf_counter()
        for p in particles:
            bucket.add_particle_nearest_open(p, animate=False)
        t1 = time.perf_counter()
        # grab from random spots so removals hit every layer
        while len(bucket):
            x = float(rng.uniform(-width / 2, width / 2))
            bucket.extract_closest_particle(Vector2(x, 0.0))
        t2 = time.perf_counter()

        fill_times.append(t1 - t0)
        empty_times.append(t2 - t1)

    return capacity, float(np.mean(fill_times)), float(np.mean(empty_times))

if __name__ == "__main__":
    for slots in [3, 5, 8, 12]:
        n, fill_s, empty_s = run(slots)
        print(f"slots={slots:3d}  particles={n:4d}  fill={1e3*fill_s:8.3f} ms  empty={1e3*empty_s:8.3f} ms")
