# Generic imports
import math
import numba as nb

### ************************************************
### Derive velocity from the potential gradient
### v = -grad(phi): flow goes from high to low potential
@nb.njit(cache=True, nogil=True)
def derive_velocity(phi, material, vx, vy, speed, w, h):
    vx[:]    = 0.0
    vy[:]    = 0.0
    speed[:] = 0.0

    for y in range(1, h-1):
        for x in range(1, w-1):
            i = y*w + x

            # Walls carry no flow
            if (material[i] >= 1.0):
                continue

            # Central difference gradient
            u = -(phi[i+1] - phi[i-1])/2.0
            v = -(phi[i+w] - phi[i-w])/2.0

            # Obstacles slow flow proportionally
            r = material[i]
            if (r > 0.0):
                u *= (1.0 - r)
                v *= (1.0 - r)

            vx[i]    = u
            vy[i]    = v
            speed[i] = math.sqrt(u*u + v*v)

### ************************************************
### Maximum speed over the whole grid
@nb.njit(cache=True, nogil=True)
def max_speed(speed):
    m = 0.0
    for i in range(speed.shape[0]):
        if (speed[i] > m):
            m = speed[i]

    return m

### ************************************************
### Velocity of a single cell, zero outside the grid
@nb.njit(cache=True, nogil=True)
def cell_velocity(vx, vy, w, h, x, y):
    if (x < 0 or x >= w or y < 0 or y >= h):
        return 0.0, 0.0

    i = y*w + x
    return vx[i], vy[i]

### ************************************************
### Bilinear interpolation of velocity at fractional coordinates
@nb.njit(cache=True, nogil=True)
def sample_velocity(vx, vy, w, h, fx, fy):
    x0 = int(math.floor(fx))
    y0 = int(math.floor(fy))
    sx = fx - x0
    sy = fy - y0

    u00, v00 = cell_velocity(vx, vy, w, h, x0,   y0)
    u10, v10 = cell_velocity(vx, vy, w, h, x0+1, y0)
    u01, v01 = cell_velocity(vx, vy, w, h, x0,   y0+1)
    u11, v11 = cell_velocity(vx, vy, w, h, x0+1, y0+1)

    w00 = (1.0 - sx)*(1.0 - sy)
    w10 = sx*(1.0 - sy)
    w01 = (1.0 - sx)*sy
    w11 = sx*sy

    u = w00*u00 + w10*u10 + w01*u01 + w11*u11
    v = w00*v00 + w10*v10 + w01*v01 + w11*v11

    return u, v

### ************************************************
### Bilinear interpolation at many points at once
@nb.njit(cache=True, nogil=True)
def sample_velocity_many(vx, vy, w, h, px, py, out_u, out_v):
    for k in range(px.shape[0]):
        u, v = sample_velocity(vx, vy, w, h, px[k], py[k])
        out_u[k] = u
        out_v[k] = v
