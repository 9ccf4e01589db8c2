from poets_pal.app.app import main

if __name__ == "__main__":
    main()
