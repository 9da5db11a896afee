"""Rust type and signature translation to TypeScript"""
