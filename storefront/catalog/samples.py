from __future__ import annotations

from typing import List, Optional

from .models import CatalogEntry
from .timestamps import utcnow_iso


def sample_entries(created_at: Optional[str] = None) -> List[CatalogEntry]:
    """
    Built-in catalog written to an empty slot on first load.
    """
    stamp = created_at or utcnow_iso()
    return [
        CatalogEntry(
            id="1",
            model="iPhone 14 Pro",
            variant="Pro",
            storage="256GB",
            color="Deep Purple",
            condition="Excellent",
            price=899,
            description="Nearly flawless condition. Battery health at 96%. Includes original box and accessories.",
            images=[
                "https://images.unsplash.com/photo-1663761879666-f7c519a4b428?auto=format&fit=crop&q=80&w=600",
                "https://images.unsplash.com/photo-1664491800325-705048bb7742?auto=format&fit=crop&q=80&w=600",
            ],
            inStock=True,
            featured=True,
            createdAt=stamp,
        ),
        CatalogEntry(
            id="2",
            model="iPhone 13",
            variant="Standard",
            storage="128GB",
            color="Midnight",
            condition="Good",
            price=599,
            description="Minor wear on sides. Battery health at 89%. Includes charging cable only.",
            images=[
                "https://images.unsplash.com/photo-1632661674596-df8be070a5c5?auto=format&fit=crop&q=80&w=600",
            ],
            inStock=True,
            createdAt=stamp,
        ),
        CatalogEntry(
            id="3",
            model="iPhone 15",
            variant="Standard",
            storage="512GB",
            color="Blue",
            condition="New",
            price=1199,
            description="Sealed in box. Full warranty coverage.",
            images=[
                "https://images.unsplash.com/photo-1695048133142-1a20484689ff?auto=format&fit=crop&q=80&w=600",
            ],
            inStock=True,
            featured=True,
            createdAt=stamp,
        ),
        CatalogEntry(
            id="4",
            model="iPhone 12",
            variant="Mini",
            storage="64GB",
            color="Red",
            condition="Fair",
            price=399,
            description="Visible scratches on screen and frame. Battery health at 82%. Fully functional.",
            images=[
                "https://images.unsplash.com/photo-1607936854279-55e8a4c64888?auto=format&fit=crop&q=80&w=600",
            ],
            inStock=True,
            createdAt=stamp,
        ),
    ]
