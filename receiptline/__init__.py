"""Receipt OCR line assembly and field extraction."""
