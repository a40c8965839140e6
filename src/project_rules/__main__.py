from project_rules.cli import app

if __name__ == "__main__":  # pragma: no cover
    app(prog_name="project-rules")
