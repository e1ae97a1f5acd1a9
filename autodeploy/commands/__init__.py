"""Interactive front ends: profile menu and ad-hoc prompts."""
