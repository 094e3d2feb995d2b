"""Research Radar: author search and AI profiling backend."""
