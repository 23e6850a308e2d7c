"""Generator — drafts new package specs from repository URLs."""
