import torch

from .errors import InvalidGeometry

device = torch.device('cuda' if torch.cuda.is_available() else 'cpu')
torch.set_default_device(device)

EPSILON = 1e-3
PARALLEL_EPSILON = 1e-6

inner = lambda a, b: (a * b).sum(-1, keepdim=True)


def vec3(v):
    if isinstance(v, torch.Tensor):
        return v.to(device=device, dtype=torch.float32)
    return torch.tensor(v, dtype=torch.float32, device=device)


def cross(a, b):
    a, b = torch.broadcast_tensors(a, b)
    return torch.linalg.cross(a, b, dim=-1)


def distance(a, b):
    return (a - b).norm(dim=-1)


def unit(v):
    length = v.norm(dim=-1, keepdim=True)
    if (length == 0).any():
        raise InvalidGeometry("cannot normalize a zero-length vector")
    return v / length


class Ray:
    """A batch of rays: origins and unit directions, both shaped (N, 3)."""

    def __init__(self, origin, dir):
        origin, dir = torch.broadcast_tensors(vec3(origin), vec3(dir))
        self.origin = origin.reshape(-1, 3)
        self.dir = unit(dir.reshape(-1, 3))
        self.len = len(self.origin)

    def __getitem__(self, mask):
        return Ray(self.origin[mask], self.dir[mask])

    def __len__(self):
        return self.len

    def evaluate(self, t):
        t = torch.as_tensor(t, dtype=torch.float32, device=self.dir.device)
        return self.origin + self.dir * t.reshape(-1, 1)


class Hit:
    # index is the position of the hit object in the scene, -1 where nothing was hit
    def __init__(self, dist, point, normal, index):
        self.dist = dist
        self.point = point
        self.normal = normal
        self.index = index

    @classmethod
    def miss(cls, n):
        return cls(torch.full([n], torch.inf),
                   torch.zeros([n, 3]),
                   torch.zeros([n, 3]),
                   torch.full([n], -1, dtype=torch.long))

    @property
    def mask(self):
        return self.index >= 0

    def __getitem__(self, mask):
        return Hit(self.dist[mask], self.point[mask], self.normal[mask], self.index[mask])

    def __len__(self):
        return len(self.dist)
