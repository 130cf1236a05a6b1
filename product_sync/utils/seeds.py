from ..models import Seed

DEMO_BASE = {
    "brand": "Scary Fast",
    "theme": "license-plate / DMV / Louisiana / street speed aesthetic",
    "style_notes": "minimal, reflective ink, black/metallic palette, car/ID motifs",
}

# (product_type, extra style notes)
DEMO_LINEUP = [
    ("Hat", "snapback license plate embroidery"),
    ("Hat", "dad cap 'SPEED LIMIT NONE'"),
    ("Beanie", "knit patch"),
    ("T-Shirt", "reflective logo chest"),
    ("T-Shirt", "highway photo-real car graphic"),
    ("T-Shirt", "Louisiana ID mockup"),
    ("T-Shirt", "0-60 tachometer"),
    ("Hoodie", "Performance Club back print"),
    ("Crewneck", "embroidered FAST chest"),
    ("Pullover", "TURBO MODE glow print"),
    ("Joggers", "reflective side logo"),
    ("Shorts", "license plate side print"),
    ("Track Pants", "side strip branding"),
    ("Windbreaker", "reflective back text"),
    ("Jacket", "varsity license-plate patches"),
    ("Keychain", "metal license-plate tag"),
    ("Stickers", "vinyl pack"),
    ("Lanyard", "repeating ID design"),
    ("Jersey", "mesh racing jersey 00 number"),
    ("Limited Hoodie", "full-size Louisiana plate back print"),
]

DEFAULT_SEED = {
    "brand": "Scary Fast",
    "theme": "license-plate / DMV aesthetic, street speed, Louisiana vibe",
    "product_type": "t-shirt",
    "style_notes": "minimal, reflective ink, black/metallic palette",
}


def demo_seeds(brand: str | None = None) -> list[Seed]:
    seeds = []
    for product_type, notes in DEMO_LINEUP:
        seeds.append(Seed(
            brand=brand or DEMO_BASE["brand"],
            theme_notes=DEMO_BASE["theme"],
            product_type=product_type,
            style_notes=f"{DEMO_BASE['style_notes']}, {notes}",
        ))
    return seeds


def default_seed(brand: str | None = None) -> Seed:
    seed = Seed.from_dict(DEFAULT_SEED)
    if brand:
        return Seed(brand=brand, theme_notes=seed.theme_notes,
                    product_type=seed.product_type, style_notes=seed.style_notes)
    return seed
