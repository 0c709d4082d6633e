"""prepdocs -- turn PDFs and images into embedded, searchable content records."""

__version__ = "0.1.0"
