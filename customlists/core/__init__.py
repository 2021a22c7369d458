# Core filtering engine package
