from pathlib import Path
from PIL import Image, ImageDraw

PLACEHOLDER_FILENAME = "placeholder.jpg"


def render_placeholder(out_path: Path, title: str = "No image", subtitle: str = "Photo coming soon") -> Path:
    """Draw the stand-in picture shown for entries without images."""
    out_path.parent.mkdir(parents=True, exist_ok=True)

    img = Image.new("RGB", (600, 600), color=(243, 244, 246))
    draw = ImageDraw.Draw(img)

    # Phone outline
    draw.rounded_rectangle((210, 120, 390, 440), radius=28, outline=(156, 163, 175), width=6)
    draw.ellipse((285, 400, 315, 430), outline=(156, 163, 175), width=4)

    # Default bitmap font keeps this free of font files
    draw.text((40, 500), title, fill=(75, 85, 99))
    draw.text((40, 530), subtitle, fill=(107, 114, 128))

    img.save(out_path, format="JPEG", quality=92)
    return out_path


def ensure_placeholder(data_dir: Path) -> Path:
    path = Path(data_dir) / PLACEHOLDER_FILENAME
    if not path.exists():
        render_placeholder(path)
    return path
