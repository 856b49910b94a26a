"""Receipt bill splitting: proportional item and tax allocation among participants."""
