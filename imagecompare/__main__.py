from .compare_images import main

if __name__ == "__main__":
    main()
