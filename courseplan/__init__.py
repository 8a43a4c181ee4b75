"""Course plan: browse courses by term, build a personal plan, spot time conflicts."""
