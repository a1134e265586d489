from codegraph_tiers.cli import main

if __name__ == "__main__":
    main()
