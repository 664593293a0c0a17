"""Cross-cutting helpers shared by the notes, render and publish layers."""
