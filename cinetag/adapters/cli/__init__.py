"""Adaptateur CLI (typer + rich) de CineTag."""
