"""Record model, record sources and configuration."""
