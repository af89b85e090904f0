"""Statement ingestion: transport decoding, format dispatch and parsers."""
