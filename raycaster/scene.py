import torch

from .objects import color


class Scene:
    def __init__(self, objects=(), lights=(), spotlights=(), background=(0, 0, 0.)):
        self.background = color(background)
        self.objects = list(objects)
        self.lights = list(lights)
        self.spotlights = list(spotlights)

    def add_object(self, obj):
        self.objects.append(obj)
        return obj

    def clear_objects(self):
        self.objects.clear()

    def add_light(self, light):
        self.lights.append(light)
        return light

    def clear_lights(self):
        self.lights.clear()

    def add_spotlight(self, spotlight):
        self.spotlights.append(spotlight)
        return spotlight

    def clear_spotlights(self):
        self.spotlights.clear()

    def materials(self):
        """Per-object diffuse colours, specular colours and shadow-receiver flags,
        stacked so they can be gathered by hit index."""
        diffuse = torch.stack([obj.diffuse_color for obj in self.objects], dim=0)
        specular = torch.stack([obj.specular_color for obj in self.objects], dim=0)
        receives = torch.tensor([obj.receives_shadows for obj in self.objects], dtype=torch.bool)
        return diffuse, specular, receives
