"""Entry point for running the weather virtual sensor from a checkout."""

from weather_sensor.app import main


if __name__ == '__main__':
    main()
