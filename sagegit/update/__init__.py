"""Checking for newer releases."""