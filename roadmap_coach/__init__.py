# ABOUTME: Roadmap coach package: server-side generation (generator) and client-side call + stepper (client, intake).
# ABOUTME: Use generate_roadmap_content() in the API and generate_roadmap() from the UI.

from roadmap_coach.client import generate_roadmap
from roadmap_coach.generator import generate_roadmap_content

__all__ = ["generate_roadmap", "generate_roadmap_content"]
