import logging
import time
import matplotlib.pyplot as plt

from raycaster import Camera, Light, Plane, RenderSettings, Scene, Sphere, SpotLight, render

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s: %(message)s")
logger = logging.getLogger("run")

scene = Scene(
    background = [0, 0, 0.],
    objects = [
        Plane([0, -5, 0], [0, 1, 0], diffuse='dark_blue', width=600, height=400),
        Sphere([0, 1, -2], 1, diffuse='purple'),
    ],
    lights = [Light([100, 150, 150], 0.2)],
    spotlights = [SpotLight([-20, 30, 45], [1, -5, 0], intensity=0.02, angle=15)],
)

camera = Camera()
settings = RenderSettings(power=100, intensity_scale=1e5)
start_time = time.time()
image = render(scene, camera, width=1200, height=800, settings=settings)
end_time = time.time()
logger.info("Rendered %dx%d image. Took %.2f seconds.", image.width, image.height, end_time - start_time)
plt.imsave("output.png", image.numpy())
logger.info("render saved")
