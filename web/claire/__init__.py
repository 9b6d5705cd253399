"""CLAIRE.AI document question answering web client."""
