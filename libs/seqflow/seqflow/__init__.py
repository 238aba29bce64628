"""SeqFlow: sequential async pipeline execution."""
