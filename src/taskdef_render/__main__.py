from taskdef_render._main import main

if __name__ == "__main__":
    raise SystemExit(main())
