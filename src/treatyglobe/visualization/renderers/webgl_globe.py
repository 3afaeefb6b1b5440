# SPDX-License-Identifier: Apache-2.0
"""WebGL/Three.js treaty globe renderer."""

from __future__ import annotations

import json
import logging
from html import escape
from pathlib import Path
from textwrap import dedent

from treatyglobe.scene import marker_payload

from .base import InteractiveBundle, InteractiveRenderer
from .registry import register

LOGGER = logging.getLogger(__name__)

THREE_MODULE_URL = "https://cdn.jsdelivr.net/npm/three@0.161.0/build/three.module.js"
DEFAULT_TEXTURE = "earth.jpg"


def _is_remote_ref(value: object) -> bool:
    if not isinstance(value, str):
        return False
    return value.lower().startswith(("http://", "https://"))


@register
class WebGLTreatyGlobeRenderer(InteractiveRenderer):
    slug = "webgl-treaty-globe"
    description = "Three.js globe with hoverable treaty markers."

    def build(self, *, output_dir: Path) -> InteractiveBundle:
        output_dir = Path(output_dir)
        assets_dir = output_dir / "assets"
        assets_dir.mkdir(parents=True, exist_ok=True)

        index_html = output_dir / "index.html"
        script_path = assets_dir / "globe.js"
        config_path = assets_dir / "config.json"
        markers_path = assets_dir / "markers.json"

        staged: list[Path] = []
        texture_ref = self._stage_texture(assets_dir, staged)

        payload = [marker_payload(m) for m in self.markers]
        markers_path.write_text(
            json.dumps(payload, indent=2, ensure_ascii=False) + "\n", encoding="utf-8"
        )

        config = self._bundle_config(texture_ref)
        config_path.write_text(
            json.dumps(config, indent=2, ensure_ascii=False) + "\n", encoding="utf-8"
        )
        index_html.write_text(self._render_index_html(config), encoding="utf-8")
        script_path.write_text(self._render_script(), encoding="utf-8")

        LOGGER.debug("Wrote %d markers to %s", len(payload), markers_path)
        return InteractiveBundle(
            output_dir=output_dir,
            index_html=index_html,
            marker_count=len(payload),
            assets=(script_path, config_path, markers_path, *staged),
        )

    def _stage_texture(self, assets_dir: Path, staged: list[Path]) -> str | None:
        texture = self._options.get("texture")
        if not texture:
            return None
        if _is_remote_ref(texture):
            return str(texture)
        source = Path(str(texture)).expanduser()
        if not source.is_file():
            raise FileNotFoundError(f"Texture file not found: {source}")
        textures_dir = assets_dir / "textures"
        textures_dir.mkdir(parents=True, exist_ok=True)
        dest = textures_dir / source.name
        if source.resolve() != dest.resolve():
            dest.write_bytes(source.read_bytes())
        staged.append(dest)
        return f"assets/textures/{source.name}"

    def _bundle_config(self, texture_ref: str | None) -> dict[str, object]:
        cfg = self.config
        return {
            "title": self._options.get("title") or "Treaty Globe",
            "width": self._options.get("width"),
            "height": self._options.get("height"),
            "texture": texture_ref,
            "markers": "assets/markers.json",
            "globe_radius": cfg.globe_radius,
            "marker_size": cfg.marker_size,
            "marker_color": self._options.get("marker_color") or "#ff0000",
            "fov": cfg.fov,
            "near": cfg.near,
            "far": cfg.far,
            "camera_distance": cfg.camera_distance,
            "rotation_speed": cfg.rotation_speed,
            "auto_rotate": bool(self._options.get("auto_rotate", True)),
            "tooltip_offset": [10, -10],
        }

    def _render_index_html(self, config: dict[str, object]) -> str:
        title = escape(str(config.get("title") or "Treaty Globe"))
        config_json = json.dumps(config, ensure_ascii=False)
        return (
            dedent(
                f"""
            <!DOCTYPE html>
            <html lang="ko">
              <head>
                <meta charset="utf-8" />
                <meta name="viewport" content="width=device-width, initial-scale=1" />
                <title>{title}</title>
                <style>
                  body, html {{ margin: 0; padding: 0; overflow: hidden; background: #000; font-family: system-ui, sans-serif; }}
                  #treaty-globe {{ width: 100vw; height: 100vh; display: block; }}
                  #tooltip {{ position: absolute; visibility: hidden; pointer-events: none; background: rgba(0, 0, 0, 0.75); color: #fff; padding: 6px 10px; border-radius: 4px; font-size: 0.85rem; line-height: 1.4; max-width: 360px; }}
                </style>
              </head>
              <body>
                <canvas id="treaty-globe"></canvas>
                <div id="tooltip"></div>
                <script>
                  window.TREATY_GLOBE_CONFIG = {config_json};
                </script>
                <script type="module" src="assets/globe.js"></script>
              </body>
            </html>
            """
            ).strip()
            + "\n"
        )

    def _render_script(self) -> str:
        """Return the JavaScript module that boots the globe."""

        return (
            dedent(
                """
import * as THREE from "%s";

(async function bootstrap() {
  const config = window.TREATY_GLOBE_CONFIG || {};
  const canvas = document.getElementById("treaty-globe");
  const tooltip = document.getElementById("tooltip");
  if (!canvas) {
    console.warn("Treaty globe canvas element not found");
    return;
  }

  async function loadJson(url) {
    const response = await fetch(url);
    if (!response.ok) {
      throw new Error(`HTTP ${response.status} for ${url}`);
    }
    return response.json();
  }

  let markers = [];
  try {
    markers = config.markers ? await loadJson(config.markers) : [];
  } catch (error) {
    console.warn("Failed to load markers", config.markers, error);
  }

  const renderer = new THREE.WebGLRenderer({ canvas, antialias: true });
  renderer.setPixelRatio(window.devicePixelRatio || 1);
  const scene = new THREE.Scene();
  const camera = new THREE.PerspectiveCamera(
    config.fov || 75,
    window.innerWidth / window.innerHeight,
    config.near || 0.1,
    config.far || 1000,
  );
  camera.position.set(0, 0, config.camera_distance || 10);

  const globeGroup = new THREE.Group();
  scene.add(globeGroup);

  // Marker positions put +longitude on +Z; mirror Z so the texture agrees.
  const earthMaterial = new THREE.MeshBasicMaterial({
    color: 0xffffff,
    side: THREE.DoubleSide,
    wireframe: !config.texture,
  });
  const earth = new THREE.Mesh(
    new THREE.SphereGeometry(config.globe_radius || 5, 64, 64),
    earthMaterial,
  );
  earth.scale.set(1, 1, -1);
  globeGroup.add(earth);

  if (config.texture) {
    new THREE.TextureLoader().load(
      config.texture,
      (texture) => {
        texture.colorSpace = THREE.SRGBColorSpace;
        earthMaterial.map = texture;
        earthMaterial.wireframe = false;
        earthMaterial.needsUpdate = true;
      },
      undefined,
      (error) => console.warn("Failed to load texture", config.texture, error),
    );
  }

  const markerGeometry = new THREE.SphereGeometry(config.marker_size || 0.1, 8, 8);
  const markerMaterial = new THREE.MeshBasicMaterial({
    color: new THREE.Color(config.marker_color || "#ff0000"),
  });
  for (const marker of markers) {
    const mesh = new THREE.Mesh(markerGeometry, markerMaterial);
    mesh.position.fromArray(marker.position);
    globeGroup.add(mesh);
  }

  function resizeRenderer() {
    const width = config.width || window.innerWidth;
    const height = config.height || window.innerHeight;
    renderer.setSize(width, height, false);
    camera.aspect = width / height;
    camera.updateProjectionMatrix();
  }
  window.addEventListener("resize", resizeRenderer);
  resizeRenderer();

  // Nearest entry into a marker's hit sphere, in the globe's local frame.
  function pickMarker(origin, direction) {
    let best = null;
    let bestDistance = Infinity;
    for (const marker of markers) {
      const p = marker.position;
      const ox = p[0] - origin.x;
      const oy = p[1] - origin.y;
      const oz = p[2] - origin.z;
      const along = ox * direction.x + oy * direction.y + oz * direction.z;
      if (along < 0) {
        continue;
      }
      const perpSq = Math.max(ox * ox + oy * oy + oz * oz - along * along, 0);
      const radiusSq = marker.hit_radius * marker.hit_radius;
      if (perpSq > radiusSq) {
        continue;
      }
      const entry = Math.max(along - Math.sqrt(radiusSq - perpSq), 0);
      if (entry < bestDistance) {
        bestDistance = entry;
        best = marker;
      }
    }
    return best;
  }

  const raycaster = new THREE.Raycaster();
  const pointer = new THREE.Vector2();
  const offset = config.tooltip_offset || [10, -10];
  const inverse = new THREE.Matrix4();

  function onPointerMove(event) {
    const rect = canvas.getBoundingClientRect();
    pointer.x = ((event.clientX - rect.left) / rect.width) * 2 - 1;
    pointer.y = -((event.clientY - rect.top) / rect.height) * 2 + 1;
    raycaster.setFromCamera(pointer, camera);
    globeGroup.updateMatrixWorld(true);
    inverse.copy(globeGroup.matrixWorld).invert();
    const localRay = raycaster.ray.clone().applyMatrix4(inverse);
    const hit = pickMarker(localRay.origin, localRay.direction.normalize());
    if (!hit || !tooltip) {
      if (tooltip) {
        tooltip.style.visibility = "hidden";
      }
      return;
    }
    tooltip.innerHTML = hit.html;
    tooltip.style.left = `${event.clientX + offset[0]}px`;
    tooltip.style.top = `${event.clientY + offset[1]}px`;
    tooltip.style.visibility = "visible";
  }
  canvas.addEventListener("pointermove", onPointerMove);

  const rotationSpeed = Number(config.rotation_speed) || 0;
  function render() {
    if (config.auto_rotate) {
      globeGroup.rotation.y += rotationSpeed;
    }
    renderer.render(scene, camera);
    requestAnimationFrame(render);
  }
  requestAnimationFrame(render);
})().catch((error) => {
  console.error("Treaty globe bootstrap failed", error);
});
"""
                % THREE_MODULE_URL
            ).strip()
            + "\n"
        )


__all__ = ["WebGLTreatyGlobeRenderer"]
