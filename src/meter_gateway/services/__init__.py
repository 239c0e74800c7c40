"""Request orchestration that spans more than one upstream call."""
