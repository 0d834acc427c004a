"""Text-processing services of the completion recovery pipeline."""
