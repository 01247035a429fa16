"""
Concept mappings: abstract intents mapped to curated resources.

resource_names must match Resource.name values in the live catalog
(case-insensitive). Mismatches are reported by search.validation, never
at query time.
"""

from scoring.context import ConceptMapping

# fmt: off
CONCEPT_MAPPINGS: dict = {
    "vibe code": ConceptMapping(
        keywords=("vibe", "vibe coding", "vibe-coding", "vibecoding", "ai coding", "ai code", "prompt to code"),
        resource_names=("Cursor", "v0", "Bolt", "Replit", "GitHub Copilot", "Lovable", "Windsurf"),
        categories=("AI", "Tools"),
        description="AI-powered coding tools that turn natural language into code",
    ),
    "youtube creator": ConceptMapping(
        keywords=("youtube", "youtuber", "content creator", "video creator", "creator tools", "thumbnails"),
        resource_names=("Runway", "VEED.io", "Descript", "Capcut", "Canva", "Thumbnail AI"),
        categories=("Tools",),
        description="Tools for YouTube content creation, editing, and thumbnails",
    ),
    "ai art": ConceptMapping(
        keywords=("ai art", "ai image", "ai generate", "generate image", "text to image", "ai illustration"),
        resource_names=("Midjourney", "DALL-E", "Leonardo AI", "Stable Diffusion", "Ideogram", "Adobe Firefly"),
        categories=("AI", "Tools"),
        description="AI-powered image generation and creative tools",
    ),
    "no code": ConceptMapping(
        keywords=("no code", "nocode", "no-code", "low code", "lowcode", "low-code", "visual builder", "drag and drop"),
        resource_names=("Framer", "Webflow", "Wix", "Squarespace", "Softr", "Glide", "Bubble", "Carrd"),
        categories=("Tools",),
        description="Visual website and app builders without coding",
    ),
    "stock assets": ConceptMapping(
        keywords=("stock", "free photos", "free images", "free videos", "media library", "stock footage", "royalty free"),
        resource_names=("Unsplash", "Pexels", "Pixabay", "Freepik", "Coverr", "Mixkit"),
        categories=("Templates", "Inspiration"),
        description="Free and royalty-free stock photos, videos, and assets",
    ),
    "design inspiration": ConceptMapping(
        keywords=("inspiration", "inspo", "ideas", "portfolio", "showcase", "gallery", "examples", "reference"),
        resource_names=("Dribbble", "Behance", "Awwwards", "Pinterest", "Mobbin", "Land-book", "One Page Love"),
        categories=("Inspiration",),
        description="Design inspiration galleries and showcases",
    ),
    "figma alternative": ConceptMapping(
        keywords=("figma alternative", "figma alternatives", "like figma", "instead of figma", "replace figma"),
        resource_names=("Penpot", "Sketch", "Adobe XD", "Lunacy", "Framer"),
        categories=("Tools",),
        description="Design tools similar to or alternative to Figma",
    ),
    "website builder": ConceptMapping(
        keywords=("website builder", "site builder", "web builder", "build website", "make website", "create website"),
        resource_names=("Framer", "Webflow", "Wix", "Squarespace", "Carrd", "Super", "Typedream"),
        categories=("Tools",),
        description="Tools for building and hosting websites",
    ),
    "color tool": ConceptMapping(
        keywords=("color tool", "color picker", "palette generator", "color palette", "color scheme", "colors"),
        resource_names=("Coolors", "Color Hunt", "Adobe Color", "Realtime Colors", "Huemint", "Khroma"),
        categories=("Tools",),
        description="Color palette generators and color tools",
    ),
    "font finder": ConceptMapping(
        keywords=("font finder", "find font", "identify font", "what font", "font pairing", "font combination"),
        resource_names=("Google Fonts", "Fontshare", "Font Squirrel", "WhatTheFont", "Typewolf", "Fontjoy"),
        categories=("Tools", "Templates"),
        description="Font discovery, pairing, and typography tools",
    ),
    "icon library": ConceptMapping(
        keywords=("icon library", "icon set", "icons", "icon pack", "free icons", "icon collection"),
        resource_names=("Heroicons", "Feather Icons", "Phosphor Icons", "Lucide", "Iconoir", "Tabler Icons", "Font Awesome"),
        categories=("Templates", "Tools"),
        description="Icon libraries and icon sets for design and development",
    ),
    "component library": ConceptMapping(
        keywords=("component library", "ui library", "ui kit", "design system", "react components", "ui components"),
        resource_names=("shadcn/ui", "Radix", "Chakra UI", "MUI", "Ant Design", "Tailwind UI"),
        categories=("Tools", "Templates"),
        description="UI component libraries and design systems",
    ),
    "motion design": ConceptMapping(
        keywords=("motion design", "motion graphics", "animation", "animate", "after effects", "lottie"),
        resource_names=("LottieFiles", "Rive", "Jitter", "Cavalry", "Fable", "Motion"),
        categories=("Tools",),
        description="Motion design and animation tools",
    ),
    "remove background": ConceptMapping(
        keywords=("remove background", "background remover", "cutout", "remove bg", "transparent", "extract"),
        resource_names=("Remove.bg", "Photoroom", "Unscreen", "Clipping Magic"),
        categories=("Tools", "AI"),
        description="Background removal and image editing tools",
    ),
}
# fmt: on
