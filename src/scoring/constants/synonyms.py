"""
Synonym groups for query expansion.

Key is the canonical lowercase term, values are lowercase variants.
Expansion is bidirectional: any value expands to its key and siblings.
"""

# fmt: off
SYNONYM_GROUPS: dict = {
    # Visual media
    "photo": ["photography", "image", "picture", "visual", "photos", "images", "pictures", "pic", "pics", "photograph"],
    "video": ["film", "movie", "footage", "clip", "editing", "videos", "films", "movies", "clips", "motion", "cinematic"],
    "animation": ["animate", "animated", "motion", "animations", "motion graphics", "lottie"],

    # Design
    "design": ["designer", "designing", "designs", "ui", "ux", "interface", "visual"],
    "prototype": ["prototyping", "prototypes", "mockup", "mockups", "wireframe", "wireframes"],
    "icon": ["icons", "iconography", "pictogram", "pictograms", "glyph", "glyphs", "symbol", "symbols"],
    "illustration": ["illustrations", "illustrator", "drawing", "drawings", "artwork", "art"],

    # Typography
    "font": ["fonts", "typography", "typeface", "typefaces", "type", "lettering", "typographic"],

    # 3D
    "3d": ["three-dimensional", "webgl", "modeling", "render", "rendering", "three.js", "threejs", "blender", "3-d"],

    # Code & development
    "code": ["coding", "programming", "development", "developer", "dev", "software", "engineer", "engineering"],
    "website": ["web", "site", "webpage", "webpages", "sites", "websites", "landing page", "landing pages"],
    "component": ["components", "ui kit", "ui kits", "design system", "design systems"],

    # AI
    "ai": ["artificial intelligence", "machine learning", "ml", "gpt", "llm", "neural", "generative"],

    # Resources
    "free": ["freeware", "gratis", "no cost", "open source", "opensource", "libre"],
    "template": ["templates", "starter", "starters", "boilerplate", "scaffold", "kit", "kits"],
    "asset": ["assets", "resource", "resources", "stock", "library", "libraries"],

    # Learning
    "tutorial": ["tutorials", "course", "courses", "lesson", "lessons", "guide", "guides", "learn", "learning", "education", "educational"],

    # Collaboration
    "collaboration": ["collaborate", "collaborative", "team", "teams", "teamwork", "share", "sharing", "multiplayer"],

    # Color
    "color": ["colors", "colour", "colours", "palette", "palettes", "gradient", "gradients", "scheme", "schemes"],

    # Audio
    "audio": ["sound", "sounds", "music", "soundtrack", "sfx", "sound effects"],
}
# fmt: on
