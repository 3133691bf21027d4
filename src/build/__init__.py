"""Build orchestration and collaborator interfaces."""
