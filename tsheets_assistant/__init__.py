"""Voice assistant webhook for clocking in and out of TSheets."""
